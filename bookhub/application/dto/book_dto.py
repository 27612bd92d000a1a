"""
Book DTO
========

Pydantic models for book API requests and responses.
"""
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from bookhub.application.dto.common_dto import Pagination


class BookCreateRequest(BaseModel):
    """DTO for adding a book to the catalogue."""
    title: str = Field(..., description="1 to 200 characters")
    author: str = Field(..., description="1 to 100 characters")
    isbn: str = Field(..., description="10 or 13 digits, unique")
    published_year: int
    total_copies: int = Field(..., description="At least 1")
    
    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Clean Code",
                "author": "Robert C. Martin",
                "isbn": "9780132350884",
                "published_year": 2008,
                "total_copies": 5,
            }
        }
    }


class BookResponse(BaseModel):
    id: str
    title: str
    author: str
    isbn: str
    published_year: int
    total_copies: int
    available_copies: int
    availability_status: str  # derived from available_copies
    created_at: datetime
    updated_at: datetime


class BookListResponse(BaseModel):
    books: List[BookResponse]
    pagination: Pagination
