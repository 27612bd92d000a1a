from .create_user import CreateUserUseCase
from .update_user import UpdateUserUseCase
from .disable_user import DisableUserUseCase
from .validate_credentials import ValidateCredentialsUseCase

__all__ = [
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "DisableUserUseCase",
    "ValidateCredentialsUseCase",
]
