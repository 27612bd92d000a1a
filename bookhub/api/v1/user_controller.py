"""
User Controller
===============

FastAPI controller for user management endpoints.
Registration is public; everything else needs a bearer token.
"""
from fastapi import APIRouter, Depends, Query, status

from bookhub.api.v1.dependencies import get_user_service, require_auth
from bookhub.api.v1.errors import to_http_exception
from bookhub.application.dto.common_dto import ErrorResponse, MessageResponse, Pagination
from bookhub.application.dto.user_dto import (
    UserCreateRequest,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
)
from bookhub.application.inputs import CreateUserInput, UpdateUserInput
from bookhub.application.services.user_service import UserService
from bookhub.domain.models.user import User

router = APIRouter(tags=["users"])

_errors = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        active=user.active,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Register a user",
)
def create_user(
    request: UserCreateRequest,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Register a user."""
    try:
        user = service.create_user(
            CreateUserInput(name=request.name, email=request.email, password=request.password)
        )
    except Exception as e:
        raise to_http_exception(e)
    return to_user_response(user)


@router.get(
    "",
    response_model=UserListResponse,
    responses=_errors,
    summary="List users",
    dependencies=[Depends(require_auth)],
)
def list_users(
    page: int = Query(1),
    limit: int = Query(10),
    service: UserService = Depends(get_user_service),
) -> UserListResponse:
    """List users, newest first."""
    try:
        result = service.list_users(page=page, limit=limit)
    except Exception as e:
        raise to_http_exception(e)
    return UserListResponse(
        users=[to_user_response(u) for u in result.items],
        pagination=Pagination(
            page=result.page,
            limit=result.limit,
            total=result.total,
            total_pages=result.total_pages,
        ),
    )


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses=_errors,
    summary="Get a user",
    dependencies=[Depends(require_auth)],
)
def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        user = service.get_user(user_id)
    except Exception as e:
        raise to_http_exception(e)
    return to_user_response(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses=_errors,
    summary="Update a user",
    description="Change name and/or email. Omitted fields are left unchanged.",
    dependencies=[Depends(require_auth)],
)
def update_user(
    user_id: str,
    request: UserUpdateRequest,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        user = service.update_user(
            user_id, UpdateUserInput(name=request.name, email=request.email)
        )
    except Exception as e:
        raise to_http_exception(e)
    return to_user_response(user)


@router.patch(
    "/{user_id}/disable",
    response_model=MessageResponse,
    responses=_errors,
    summary="Disable a user",
    description="One-way: a disabled user can no longer log in or borrow.",
    dependencies=[Depends(require_auth)],
)
def disable_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    try:
        service.disable_user(user_id)
    except Exception as e:
        raise to_http_exception(e)
    return MessageResponse(message="user disabled successfully")
