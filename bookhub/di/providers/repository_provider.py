from typing import TYPE_CHECKING

from ...core.config import STORAGE_BACKEND_MONGO, get_settings
from ...domain.repositories.book_repository import BookRepository
from ...domain.repositories.loan_repository import LoanRepository
from ...domain.repositories.user_repository import UserRepository
from .database_provider import MONGO_CLIENT_KEY, SQL_DATABASE_KEY

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires domain interfaces to infrastructure implementations"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all repository implementations.
        Gets the database handle from the database provider and creates repository instances.
        """
        if get_settings().storage_backend == STORAGE_BACKEND_MONGO:
            from ...infrastructure.db.mongo_book_repository import MongoBookRepository
            from ...infrastructure.db.mongo_loan_repository import MongoLoanRepository
            from ...infrastructure.db.mongo_user_repository import MongoUserRepository
            
            mongo_client = container.get(MONGO_CLIENT_KEY)
            container.register_singleton(UserRepository, MongoUserRepository(mongo_client))
            container.register_singleton(BookRepository, MongoBookRepository(mongo_client))
            container.register_singleton(LoanRepository, MongoLoanRepository(mongo_client))
            return
        
        from ...infrastructure.db.sql_book_repository import SqlBookRepository
        from ...infrastructure.db.sql_loan_repository import SqlLoanRepository
        from ...infrastructure.db.sql_user_repository import SqlUserRepository
        
        database = container.get(SQL_DATABASE_KEY)
        container.register_singleton(UserRepository, SqlUserRepository(database))
        container.register_singleton(BookRepository, SqlBookRepository(database))
        container.register_singleton(LoanRepository, SqlLoanRepository(database))
