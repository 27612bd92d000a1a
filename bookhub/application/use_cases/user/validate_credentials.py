"""
Validate Credentials Use Case
=============================

Checks an email/password pair during login.
"""
from bookhub.domain.exceptions import UserDisabledError, UserNotFoundError
from bookhub.domain.models.user import User
from bookhub.domain.repositories.user_repository import UserRepository
from bookhub.infrastructure.security.password_hasher import PasswordHasher


class ValidateCredentialsUseCase:
    """
    Use case responsible for authenticating a user by email and password.
    
    A wrong password is reported as UserNotFoundError, the same as an
    unknown email, so callers cannot tell which one failed.
    """
    
    def __init__(self, user_repository: UserRepository, password_hasher: PasswordHasher):
        self._repository = user_repository
        self._hasher = password_hasher
    
    def execute(self, email: str, password: str) -> User:
        """
        Raises:
            UserNotFoundError: Unknown email or wrong password
            UserDisabledError: Account is disabled
        """
        user = self._repository.find_by_email(email)
        if user is None:
            raise UserNotFoundError()
        
        if not user.is_active():
            raise UserDisabledError()
        
        if not self._hasher.verify(password, user.password_hash):
            raise UserNotFoundError()
        
        return user
