"""
Book Repository Interface
=========================

Abstract interface for book data access.
Implementations should be in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from bookhub.domain.models.book import Book


class BookRepository(ABC):
    """Abstract repository for book persistence operations."""
    
    @abstractmethod
    def create(self, book: Book) -> Book:
        """
        Persist a new book.
        
        Raises:
            BookISBNAlreadyExistsError: If the store already holds the ISBN
        """
        pass
    
    @abstractmethod
    def find_by_id(self, book_id: str) -> Optional[Book]:
        """Find a book by its ID, None if absent."""
        pass
    
    @abstractmethod
    def find_by_isbn(self, isbn: str) -> Optional[Book]:
        """Find a book by ISBN, None if absent."""
        pass
    
    @abstractmethod
    def list(
        self,
        page: int,
        limit: int,
        available_only: Optional[bool] = None,
    ) -> Tuple[List[Book], int]:
        """
        List one page of books, newest first.
        
        Args:
            page: 1-based page number
            limit: Page size
            available_only: When True, only books with available_copies > 0
            
        Returns:
            (books on the page, total matching books)
        """
        pass
    
    @abstractmethod
    def update(self, book: Book) -> Book:
        """Overwrite the stored book with the given entity."""
        pass
    
    @abstractmethod
    def adjust_available_copies(self, book_id: str, delta: int) -> Optional[Book]:
        """
        Atomically add delta to available_copies.
        
        The change is applied only if the result stays within
        0..total_copies, in a single conditional write, so two concurrent
        borrows of the last copy cannot both succeed.
        
        Args:
            book_id: Unique book identifier
            delta: -1 to lend a copy, +1 to take one back
            
        Returns:
            The updated book, or None if the guard rejected the change
            (or the book does not exist)
        """
        pass
    
    @abstractmethod
    def delete(self, book_id: str) -> bool:
        """Delete a book. True if it existed."""
        pass
