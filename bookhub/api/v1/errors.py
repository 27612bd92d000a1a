"""
API Errors
==========

Translation of domain errors into HTTP errors.

Every error body has the shape {"detail": {"error": message, "code": CODE}}.
"""
import logging

from fastapi import HTTPException, status

from bookhub.domain.exceptions import DomainError, NotFoundError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_CODE = "INTERNAL_ERROR"
UNAUTHORIZED_CODE = "UNAUTHORIZED"
BAD_REQUEST_CODE = "BAD_REQUEST"


def error_detail(message: str, code: str) -> dict:
    return {"error": message, "code": code}


def http_error(status_code: int, message: str, code: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail=error_detail(message, code))


def unauthorized(message: str = "unauthorized") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=error_detail(message, UNAUTHORIZED_CODE),
        headers={"WWW-Authenticate": "Bearer"},
    )


def to_http_exception(error: Exception) -> HTTPException:
    """
    Map an exception raised by a service to an HTTPException.
    
    NotFound errors become 404 NOT_FOUND, any other domain error becomes
    400 with its own code, and anything else becomes 500 INTERNAL_ERROR.
    """
    if isinstance(error, NotFoundError):
        return http_error(status.HTTP_404_NOT_FOUND, error.message, NotFoundError.code)
    if isinstance(error, DomainError):
        return http_error(status.HTTP_400_BAD_REQUEST, error.message, error.code)
    
    logger.exception(f"Unhandled error: {error}", exc_info=error)
    return http_error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal server error",
        INTERNAL_ERROR_CODE,
    )
