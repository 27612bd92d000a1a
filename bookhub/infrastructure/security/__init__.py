from .password_hasher import PasswordHasher
from .token_service import TokenService, TokenClaims, InvalidTokenError, ExpiredTokenError

__all__ = [
    "PasswordHasher",
    "TokenService",
    "TokenClaims",
    "InvalidTokenError",
    "ExpiredTokenError",
]
