import logging
from typing import TYPE_CHECKING

from ...core.config import STORAGE_BACKEND_MONGO, STORAGE_BACKEND_SQL, get_settings

if TYPE_CHECKING:
    from ..base_container import BaseContainer

logger = logging.getLogger(__name__)

MONGO_CLIENT_KEY = "mongo_client"
SQL_DATABASE_KEY = "sql_database"


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for all DB connections"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the connection for the backend named by STORAGE_BACKEND.
        Only that backend's driver is touched.
        """
        backend = get_settings().storage_backend
        
        if backend == STORAGE_BACKEND_MONGO:
            from ...infrastructure.db.mongo_connection import get_mongo_client
            container.register_singleton(MONGO_CLIENT_KEY, get_mongo_client())
        elif backend == STORAGE_BACKEND_SQL:
            from ...infrastructure.db.sql_connection import SqlDatabase
            container.register_singleton(SQL_DATABASE_KEY, SqlDatabase())
        else:
            raise ValueError(
                f"Unknown STORAGE_BACKEND '{backend}', expected "
                f"'{STORAGE_BACKEND_SQL}' or '{STORAGE_BACKEND_MONGO}'"
            )
        
        logger.info(f"Storage backend: {backend}")
