"""
Common DTO
==========

Pydantic models shared by every endpoint: error body and pagination block.
"""
from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    error: str = Field(..., description="Human readable message")
    code: str = Field(..., description="Stable machine readable error code")


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""
    detail: ErrorDetail
    
    model_config = {
        "json_schema_extra": {
            "example": {"detail": {"error": "book not found", "code": "NOT_FOUND"}}
        }
    }


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class MessageResponse(BaseModel):
    message: str
