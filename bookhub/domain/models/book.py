"""
Book Model
==========

Domain model representing a catalogued title and its copy counters.
This is a pure domain object with no infrastructure dependencies.
"""
import uuid
from datetime import datetime
from dataclasses import dataclass, field

from bookhub.domain.exceptions import (
    InvalidAvailableCopiesError,
    InvalidBookAuthorError,
    InvalidBookISBNError,
    InvalidBookTitleError,
    InvalidTotalCopiesError,
    BookNotAvailableError,
)
from bookhub.utils.datetime_utils import now

STATUS_AVAILABLE = "available"
STATUS_UNAVAILABLE = "unavailable - all copies borrowed"


def is_valid_isbn(isbn: str) -> bool:
    """Exactly 10 or 13 ASCII digits. No checksum validation."""
    if len(isbn) not in (10, 13):
        return False
    return all("0" <= c <= "9" for c in isbn)


@dataclass
class Book:
    """
    Book domain model.
    
    Invariant: 0 <= available_copies <= total_copies. Each of
    borrow_copy() / return_copy() guards its own side of it.
    """
    id: str
    title: str
    author: str
    isbn: str
    published_year: int
    total_copies: int
    available_copies: int
    created_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())
    
    @classmethod
    def create(
        cls,
        title: str,
        author: str,
        isbn: str,
        published_year: int,
        total_copies: int,
    ) -> "Book":
        """
        Build a validated book with every copy available.
        
        Raises:
            InvalidBookTitleError, InvalidBookAuthorError, InvalidBookISBNError,
            InvalidTotalCopiesError: first violated constraint, in that order
        """
        book = cls(
            id=str(uuid.uuid4()),
            title=title,
            author=author,
            isbn=isbn,
            published_year=published_year,
            total_copies=total_copies,
            available_copies=total_copies,
        )
        book.validate()
        return book
    
    def validate(self) -> None:
        if not 1 <= len(self.title) <= 200:
            raise InvalidBookTitleError()
        if not 1 <= len(self.author) <= 100:
            raise InvalidBookAuthorError()
        if not is_valid_isbn(self.isbn):
            raise InvalidBookISBNError()
        if self.total_copies < 1:
            raise InvalidTotalCopiesError()
    
    def is_available(self) -> bool:
        """Check if at least one copy can be lent."""
        return self.available_copies > 0
    
    def availability_status(self) -> str:
        return STATUS_AVAILABLE if self.is_available() else STATUS_UNAVAILABLE
    
    def borrow_copy(self) -> None:
        """Take one copy off the shelf."""
        if not self.is_available():
            raise BookNotAvailableError()
        self.available_copies -= 1
        self.updated_at = now()
    
    def return_copy(self) -> None:
        """Put one copy back on the shelf."""
        if self.available_copies >= self.total_copies:
            raise InvalidAvailableCopiesError()
        self.available_copies += 1
        self.updated_at = now()
