# Standard library imports
import logging
from typing import Optional

# Local application imports
from ..core.config import STORAGE_BACKEND_MONGO, get_settings
from .base_container import BaseContainer
from .providers import (
    AuthProvider,
    BookProvider,
    DatabaseProvider,
    LoanProvider,
    RepositoryProvider,
    SecurityProvider,
    UserProvider,
)
from .providers.database_provider import MONGO_CLIENT_KEY, SQL_DATABASE_KEY

logger = logging.getLogger(__name__)


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.
    
    Registration order is important:
    1. Database connection for the selected backend (DatabaseProvider)
    2. Repositories (RepositoryProvider) - depends on database
    3. Password hasher and token service (SecurityProvider)
    4. Services (UserProvider, BookProvider, LoanProvider, AuthProvider)
    """
    
    def __init__(self) -> None:
        super().__init__()
        self.setup()
    
    def setup(self) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: database → repositories → security → services
        """
        DatabaseProvider.register(self)
        RepositoryProvider.register(self)
        SecurityProvider.register(self)
        UserProvider.register(self)
        BookProvider.register(self)
        LoanProvider.register(self)
        AuthProvider.register(self)
    
    def init_storage(self) -> None:
        """Create the SQL schema or the Mongo indexes for the active backend."""
        if get_settings().storage_backend == STORAGE_BACKEND_MONGO:
            self.get(MONGO_CLIENT_KEY).ensure_indexes()
        else:
            self.get(SQL_DATABASE_KEY).create_all()
    
    def close(self) -> None:
        """Release database connections."""
        if self.has(MONGO_CLIENT_KEY):
            self.get(MONGO_CLIENT_KEY).close()
        if self.has(SQL_DATABASE_KEY):
            self.get(SQL_DATABASE_KEY).dispose()


# Global container instance (singleton pattern)
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """
    Get the global DI container instance (singleton pattern)
    
    Returns:
        DIContainer instance with all dependencies registered
    """
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def reset_container() -> None:
    """Close and drop the global container so the next call rebuilds it."""
    global _container
    if _container is not None:
        _container.close()
        _container = None
