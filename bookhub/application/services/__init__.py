from .auth_service import AuthService, LoginResult
from .book_service import BookService
from .loan_service import LoanService
from .user_service import UserService

__all__ = ["AuthService", "LoginResult", "BookService", "LoanService", "UserService"]
