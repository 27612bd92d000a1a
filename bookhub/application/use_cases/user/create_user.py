"""
Create User Use Case
====================

Business use case for registering a new library member.
"""
import logging

from bookhub.application.inputs import CreateUserInput
from bookhub.domain.exceptions import EmailAlreadyExistsError
from bookhub.domain.models.user import User
from bookhub.domain.repositories.user_repository import UserRepository
from bookhub.infrastructure.security.password_hasher import PasswordHasher

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """
    Use case for creating a user.
    
    Email uniqueness is checked with a lookup before the insert. That check
    is best-effort: a lookup failure is logged and treated as "no duplicate",
    and the store's unique index is what finally rejects a duplicate.
    """
    
    def __init__(self, user_repository: UserRepository, password_hasher: PasswordHasher):
        """
        Initialize use case with repository and hasher.
        
        Args:
            user_repository: Repository for user persistence
            password_hasher: Hashes the plaintext password before storage
        """
        self._repository = user_repository
        self._hasher = password_hasher
    
    def execute(self, data: CreateUserInput) -> User:
        """
        Execute the create user use case.
        
        Returns:
            Created user entity
            
        Raises:
            EmailAlreadyExistsError: Email is already registered
            InvalidUserNameError, InvalidUserEmailError, InvalidUserPasswordError
        """
        try:
            existing = self._repository.find_by_email(data.email)
        except Exception as e:
            logger.warning(f"Email lookup failed during user creation, continuing: {e}")
            existing = None
        if existing is not None:
            raise EmailAlreadyExistsError()
        
        password_hash = self._hasher.hash(data.password)
        user = User.create(data.name, data.email, password_hash)
        created = self._repository.create(user)
        logger.info(f"User {created.id} created")
        return created
