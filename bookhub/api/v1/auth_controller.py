"""
Auth Controller
===============

FastAPI controller for login.
"""
from fastapi import APIRouter, Depends

from bookhub.api.v1.dependencies import get_auth_service
from bookhub.api.v1.errors import to_http_exception, unauthorized
from bookhub.api.v1.user_controller import to_user_response
from bookhub.application.dto.auth_dto import LoginRequest, LoginResponse
from bookhub.application.dto.common_dto import ErrorResponse
from bookhub.application.services.auth_service import AuthService, InvalidCredentialsError

router = APIRouter(tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Log in",
    description="Exchange email and password for a bearer token.",
)
def login(
    request: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Log in and receive a token."""
    try:
        result = service.login(request.email, request.password)
    except InvalidCredentialsError:
        raise unauthorized("invalid credentials")
    except Exception as e:
        raise to_http_exception(e)
    
    return LoginResponse(
        token=result.token,
        expires_at=result.expires_at,
        user=to_user_response(result.user),
    )
