"""
Book Service
============

Application service for the book catalogue.
"""
from typing import Optional

from bookhub.application.inputs import CreateBookInput
from bookhub.application.use_cases.book.create_book import CreateBookUseCase
from bookhub.domain.exceptions import BookNotFoundError
from bookhub.domain.models.book import Book
from bookhub.domain.repositories.book_repository import BookRepository
from bookhub.utils.pagination import Page, clamp_pagination


class BookService:
    """Application service for book operations."""
    
    def __init__(self, book_repository: BookRepository):
        self._repository = book_repository
        self._create_use_case = CreateBookUseCase(book_repository)
    
    def create_book(self, data: CreateBookInput) -> Book:
        return self._create_use_case.execute(data)
    
    def get_book(self, book_id: str) -> Book:
        """
        Get a book by ID.
        
        Raises:
            BookNotFoundError: No book with that ID
        """
        book = self._repository.find_by_id(book_id)
        if book is None:
            raise BookNotFoundError()
        return book
    
    def list_books(
        self,
        page: int = 1,
        limit: int = 10,
        available_only: Optional[bool] = None,
    ) -> Page[Book]:
        """
        List books, newest first.
        
        Args:
            page: 1-based page number (clamped)
            limit: Page size (clamped to 1..100)
            available_only: True keeps books with free copies, False keeps
                fully borrowed ones, None applies no filter
        """
        page, limit = clamp_pagination(page, limit)
        books, total = self._repository.list(page, limit, available_only=available_only)
        return Page(items=books, total=total, page=page, limit=limit)
