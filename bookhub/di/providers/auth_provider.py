from typing import TYPE_CHECKING

from ...application.services.auth_service import AuthService
from ...application.services.user_service import UserService
from ...infrastructure.security.token_service import TokenService

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class AuthProvider:
    """Auth service provider - must run after UserProvider"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        container.register_singleton(
            AuthService,
            AuthService(
                user_service=container.get(UserService),
                token_service=container.get(TokenService),
            )
        )
