"""
Use Case Inputs
===============

Plain field bags handed from the HTTP layer to the use cases.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class CreateUserInput:
    name: str
    email: str
    password: str


@dataclass(frozen=True)
class UpdateUserInput:
    """None means "leave unchanged"."""
    name: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class CreateBookInput:
    title: str
    author: str
    isbn: str
    published_year: int
    total_copies: int


@dataclass(frozen=True)
class BorrowBookInput:
    user_id: str
    book_id: str
    due_date: Optional[datetime] = None
