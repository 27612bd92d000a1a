"""
Create Book Use Case
====================

Business use case for adding a title to the catalogue.
"""
import logging

from bookhub.application.inputs import CreateBookInput
from bookhub.domain.exceptions import BookISBNAlreadyExistsError
from bookhub.domain.models.book import Book
from bookhub.domain.repositories.book_repository import BookRepository

logger = logging.getLogger(__name__)


class CreateBookUseCase:
    """
    Use case for creating a book.
    
    The ISBN duplicate check is a best-effort lookup; the unique index on
    isbn in either store is the real guard.
    """
    
    def __init__(self, book_repository: BookRepository):
        self._repository = book_repository
    
    def execute(self, data: CreateBookInput) -> Book:
        """
        Execute the create book use case.
        
        Raises:
            BookISBNAlreadyExistsError: ISBN already catalogued
            InvalidBookTitleError, InvalidBookAuthorError, InvalidBookISBNError,
            InvalidTotalCopiesError
        """
        try:
            existing = self._repository.find_by_isbn(data.isbn)
        except Exception as e:
            logger.warning(f"ISBN lookup failed during book creation, continuing: {e}")
            existing = None
        if existing is not None:
            raise BookISBNAlreadyExistsError()
        
        book = Book.create(
            title=data.title,
            author=data.author,
            isbn=data.isbn,
            published_year=data.published_year,
            total_copies=data.total_copies,
        )
        created = self._repository.create(book)
        logger.info(f"Book {created.id} created with {created.total_copies} copies")
        return created
