"""
User Model
==========

Domain model representing a library member.
This is a pure domain object with no infrastructure dependencies.
"""
import re
import uuid
from datetime import datetime
from dataclasses import dataclass, field

from bookhub.domain.exceptions import (
    InvalidUserEmailError,
    InvalidUserNameError,
    InvalidUserPasswordError,
    UserAlreadyDisabledError,
)
from bookhub.utils.datetime_utils import now

_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def is_valid_email(email: str) -> bool:
    return _EMAIL_RE.fullmatch(email) is not None


def _is_valid_name(name: str) -> bool:
    return 3 <= len(name) <= 100


@dataclass
class User:
    """
    User domain model.
    
    The model only ever holds a password hash; hashing happens in the
    application layer before create() is called.
    """
    id: str
    name: str
    email: str
    password_hash: str
    active: bool = True
    created_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())
    
    @classmethod
    def create(cls, name: str, email: str, password_hash: str) -> "User":
        """
        Build a validated, active user.
        
        Raises:
            InvalidUserNameError, InvalidUserEmailError, InvalidUserPasswordError
        """
        user = cls(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            password_hash=password_hash,
        )
        user.validate()
        return user
    
    def validate(self) -> None:
        if not _is_valid_name(self.name):
            raise InvalidUserNameError()
        if not is_valid_email(self.email):
            raise InvalidUserEmailError()
        # Length of the stored hash, not of the plaintext
        if len(self.password_hash) < 6:
            raise InvalidUserPasswordError()
    
    def update(self, name: str = "", email: str = "") -> None:
        """
        Change name and/or email. An empty string leaves the field as is.
        
        Both values are validated before either is applied.
        """
        if name and not _is_valid_name(name):
            raise InvalidUserNameError()
        if email and not is_valid_email(email):
            raise InvalidUserEmailError()
        if name:
            self.name = name
        if email:
            self.email = email
        self.updated_at = now()
    
    def disable(self) -> None:
        """One-way switch from active to inactive."""
        if not self.active:
            raise UserAlreadyDisabledError()
        self.active = False
        self.updated_at = now()
    
    def is_active(self) -> bool:
        return self.active
