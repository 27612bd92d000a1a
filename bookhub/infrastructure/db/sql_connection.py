"""
SQL Database
============

Engine and session management for the relational backend (SQLAlchemy).
Works with any SQLAlchemy URL; SQLite is the default.
"""
import logging
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookhub.core.config import get_settings
from bookhub.infrastructure.db.sql_models import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class SqlDatabase:
    """
    Owns the engine and the session factory.
    
    Repositories open a short session per call: session() for reads,
    transaction() for writes (commits on exit, rolls back on error).
    """
    
    def __init__(
        self,
        url: Optional[str] = None,
        echo: Optional[bool] = None,
        pool_size: Optional[int] = None,
    ):
        settings = get_settings()
        self._url = make_url(url or settings.database_url)
        echo = settings.db_echo if echo is None else echo
        pool_size = pool_size or settings.db_pool_size
        
        kwargs: dict = {"echo": echo}
        is_sqlite = self._url.get_backend_name() == "sqlite"
        if is_sqlite:
            kwargs["connect_args"] = {"check_same_thread": False}
            if self._url.database in (None, "", ":memory:"):
                # One shared connection, otherwise every session sees an empty db
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_size"] = pool_size
            kwargs["pool_pre_ping"] = True
        
        self._engine: Engine = create_engine(self._url, **kwargs)
        if is_sqlite:
            event.listen(self._engine, "connect", _enable_sqlite_foreign_keys)
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
    
    @property
    def engine(self) -> Engine:
        return self._engine
    
    def create_all(self) -> None:
        """Create missing tables, constraints and indexes."""
        Base.metadata.create_all(self._engine)
        logger.info(f"SQL schema ready on {self._url.get_backend_name()}")
    
    def drop_all(self) -> None:
        Base.metadata.drop_all(self._engine)
    
    def session(self) -> Session:
        return self._session_factory()
    
    def transaction(self):
        """Context manager yielding a session inside a committed transaction."""
        return self._session_factory.begin()
    
    def dispose(self) -> None:
        self._engine.dispose()
