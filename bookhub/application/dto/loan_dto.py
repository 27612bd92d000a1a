"""
Loan DTO
========

Pydantic models for loan API requests and responses.
Loan responses are always enriched with the borrower name and book title.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from bookhub.application.dto.common_dto import Pagination


class LoanCreateRequest(BaseModel):
    """DTO for borrowing a book."""
    user_id: str
    book_id: str
    due_date: Optional[datetime] = Field(
        None, description="Defaults to 14 days from now; must be in the future"
    )
    
    model_config = {
        "json_schema_extra": {
            "example": {
                "user_id": "3f9a1c52-8a4e-4a43-9d5b-0e1f7c2b6d11",
                "book_id": "c0a8016e-2f3b-4d8e-9a71-5b6c4d3e2f10",
            }
        }
    }


class LoanResponse(BaseModel):
    id: str
    user_id: str
    book_id: str
    user_name: str
    book_title: str
    borrowed_at: datetime
    due_date: datetime
    returned_at: Optional[datetime] = None
    status: str
    overdue: bool


class LoanListResponse(BaseModel):
    loans: List[LoanResponse]
    pagination: Pagination
