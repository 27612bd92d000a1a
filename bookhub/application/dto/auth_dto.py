"""
Auth DTO
========

Pydantic models for the login endpoint.
"""
from datetime import datetime

from pydantic import BaseModel

from bookhub.application.dto.user_dto import UserResponse


class LoginRequest(BaseModel):
    email: str
    password: str
    
    model_config = {
        "json_schema_extra": {
            "example": {"email": "ada@example.com", "password": "analytical-engine"}
        }
    }


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserResponse
