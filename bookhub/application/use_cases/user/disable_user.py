"""
Disable User Use Case
=====================

Business use case for deactivating a user. There is no way back.
"""
import logging

from bookhub.domain.exceptions import UserNotFoundError
from bookhub.domain.models.user import User
from bookhub.domain.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class DisableUserUseCase:
    """Use case for disabling a user (fetch, mutate, persist)."""
    
    def __init__(self, user_repository: UserRepository):
        self._repository = user_repository
    
    def execute(self, user_id: str) -> User:
        """
        Raises:
            UserNotFoundError: No such user
            UserAlreadyDisabledError: User was already inactive
        """
        user = self._repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        
        user.disable()
        updated = self._repository.update(user)
        logger.info(f"User {user_id} disabled")
        return updated
