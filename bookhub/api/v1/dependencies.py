"""
Dependency Container
====================

FastAPI dependency functions.
Services come from the DI container; require_auth guards the private routes.
"""
import logging
from typing import Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bookhub.api.v1.errors import unauthorized
from bookhub.application.services.auth_service import AuthService
from bookhub.application.services.book_service import BookService
from bookhub.application.services.loan_service import LoanService
from bookhub.application.services.user_service import UserService
from bookhub.di.container import get_container
from bookhub.infrastructure.security.token_service import (
    ExpiredTokenError,
    InvalidTokenError,
    TokenClaims,
)

logger = logging.getLogger(__name__)

# auto_error=False so a missing header gets our 401 body instead of FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_user_service() -> UserService:
    """
    Get user service instance (singleton).
    
    Returns:
        UserService instance
    """
    return get_container().get(UserService)


def get_book_service() -> BookService:
    """
    Get book service instance (singleton).
    
    Returns:
        BookService instance
    """
    return get_container().get(BookService)


def get_loan_service() -> LoanService:
    """
    Get loan service instance (singleton).
    
    Returns:
        LoanService instance
    """
    return get_container().get(LoanService)


def get_auth_service() -> AuthService:
    return get_container().get(AuthService)


def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenClaims:
    """
    Validate the Bearer token on the request.
    
    Returns:
        Claims of the authenticated caller
    
    Raises:
        HTTPException: 401 when the header is missing or the token is not valid
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise unauthorized("authorization header required")
    
    try:
        return auth_service.authenticate(credentials.credentials)
    except ExpiredTokenError:
        raise unauthorized("token has expired")
    except InvalidTokenError as e:
        logger.info(f"Rejected bearer token: {e.message}")
        raise unauthorized("invalid token")
