"""
Providers Package
=================

Dependency injection providers for registering dependencies.
"""
from .database_provider import DatabaseProvider
from .repository_provider import RepositoryProvider
from .security_provider import SecurityProvider
from .user_provider import UserProvider
from .book_provider import BookProvider
from .loan_provider import LoanProvider
from .auth_provider import AuthProvider

__all__ = [
    "DatabaseProvider",
    "RepositoryProvider",
    "SecurityProvider",
    "UserProvider",
    "BookProvider",
    "LoanProvider",
    "AuthProvider",
]
