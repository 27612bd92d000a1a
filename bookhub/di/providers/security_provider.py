from datetime import timedelta
from typing import TYPE_CHECKING

from ...core.config import get_settings
from ...infrastructure.security.password_hasher import PasswordHasher
from ...infrastructure.security.token_service import TokenService

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class SecurityProvider:
    """Security provider - registers the password hasher and token service"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        settings = get_settings()
        container.register_singleton(
            PasswordHasher,
            PasswordHasher(rounds=settings.password_hash_rounds)
        )
        container.register_singleton(
            TokenService,
            TokenService(
                secret_key=settings.jwt_secret_key,
                token_duration=timedelta(minutes=settings.jwt_token_duration_minutes),
                issuer=settings.jwt_issuer,
            )
        )
