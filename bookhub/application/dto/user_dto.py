"""
User DTO
========

Pydantic models for user API requests and responses.
The password hash never leaves the service.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from bookhub.application.dto.common_dto import Pagination


class UserCreateRequest(BaseModel):
    """DTO for registering a user."""
    name: str = Field(..., description="Display name, 3 to 100 characters")
    email: str = Field(..., description="Unique email address")
    password: str = Field(..., description="Plaintext password, hashed before storage")
    
    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Ada Lovelace",
                "email": "ada@example.com",
                "password": "analytical-engine",
            }
        }
    }


class UserUpdateRequest(BaseModel):
    """DTO for updating a user. Omitted fields are left unchanged."""
    name: Optional[str] = None
    email: Optional[str] = None


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    active: bool
    created_at: datetime
    updated_at: datetime


class UserListResponse(BaseModel):
    users: List[UserResponse]
    pagination: Pagination
