"""
Auth Service
============

Login: credential check plus token issuance.
"""
import logging
from dataclasses import dataclass
from datetime import datetime

from bookhub.application.services.user_service import UserService
from bookhub.domain.exceptions import DomainError, UserDisabledError, UserNotFoundError
from bookhub.domain.models.user import User
from bookhub.infrastructure.security.token_service import TokenClaims, TokenService

logger = logging.getLogger(__name__)


class InvalidCredentialsError(DomainError):
    code = "UNAUTHORIZED"
    message = "invalid credentials"


@dataclass(frozen=True)
class LoginResult:
    token: str
    expires_at: datetime
    user: User


class AuthService:
    """Application service for authentication."""
    
    def __init__(self, user_service: UserService, token_service: TokenService):
        self._users = user_service
        self._tokens = token_service
    
    def login(self, email: str, password: str) -> LoginResult:
        """
        Check credentials and issue a bearer token.
        
        Unknown email, wrong password and disabled account all surface as
        InvalidCredentialsError so the caller cannot tell them apart.
        
        Raises:
            InvalidCredentialsError: Login refused
        """
        try:
            user = self._users.validate_credentials(email, password)
        except (UserNotFoundError, UserDisabledError) as e:
            logger.warning(f"Login refused for {email}: {e.code}")
            raise InvalidCredentialsError()
        
        token, expires_at = self._tokens.generate_token(user.id, user.email)
        logger.info(f"User {user.id} logged in")
        return LoginResult(token=token, expires_at=expires_at, user=user)
    
    def authenticate(self, token: str) -> TokenClaims:
        """
        Validate a bearer token.
        
        Raises:
            InvalidTokenError: Token is malformed, forged, expired or foreign
        """
        return self._tokens.validate_token(token)
