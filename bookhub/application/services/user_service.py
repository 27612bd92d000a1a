"""
User Service
============

Application service that coordinates user-related operations.
"""
from bookhub.application.inputs import CreateUserInput, UpdateUserInput
from bookhub.application.use_cases.user.create_user import CreateUserUseCase
from bookhub.application.use_cases.user.disable_user import DisableUserUseCase
from bookhub.application.use_cases.user.update_user import UpdateUserUseCase
from bookhub.application.use_cases.user.validate_credentials import ValidateCredentialsUseCase
from bookhub.domain.exceptions import UserNotFoundError
from bookhub.domain.models.user import User
from bookhub.domain.repositories.user_repository import UserRepository
from bookhub.infrastructure.security.password_hasher import PasswordHasher
from bookhub.utils.pagination import Page, clamp_pagination


class UserService:
    """
    Application service for user operations.
    
    Wraps the user use cases and adds the plain reads.
    """
    
    def __init__(self, user_repository: UserRepository, password_hasher: PasswordHasher):
        """
        Initialize service with repository and hasher.
        
        Args:
            user_repository: Repository for user persistence
            password_hasher: Password hashing strategy
        """
        self._repository = user_repository
        self._create_use_case = CreateUserUseCase(user_repository, password_hasher)
        self._update_use_case = UpdateUserUseCase(user_repository)
        self._disable_use_case = DisableUserUseCase(user_repository)
        self._credentials_use_case = ValidateCredentialsUseCase(user_repository, password_hasher)
    
    def create_user(self, data: CreateUserInput) -> User:
        return self._create_use_case.execute(data)
    
    def get_user(self, user_id: str) -> User:
        """
        Get a user by ID.
        
        Raises:
            UserNotFoundError: No user with that ID
        """
        user = self._repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user
    
    def get_user_by_email(self, email: str) -> User:
        """
        Get a user by email.
        
        Raises:
            UserNotFoundError: No user with that email
        """
        user = self._repository.find_by_email(email)
        if user is None:
            raise UserNotFoundError()
        return user
    
    def list_users(self, page: int = 1, limit: int = 10) -> Page[User]:
        """
        List users, newest first.
        
        Args:
            page: 1-based page number (clamped)
            limit: Page size (clamped to 1..100)
        """
        page, limit = clamp_pagination(page, limit)
        users, total = self._repository.list(page, limit)
        return Page(items=users, total=total, page=page, limit=limit)
    
    def update_user(self, user_id: str, data: UpdateUserInput) -> User:
        return self._update_use_case.execute(user_id, data)
    
    def disable_user(self, user_id: str) -> User:
        return self._disable_use_case.execute(user_id)
    
    def validate_credentials(self, email: str, password: str) -> User:
        return self._credentials_use_case.execute(email, password)
