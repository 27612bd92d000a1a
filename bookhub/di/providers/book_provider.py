from typing import TYPE_CHECKING

from ...application.services.book_service import BookService
from ...domain.repositories.book_repository import BookRepository

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class BookProvider:
    """Book service provider - registers catalogue services"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        container.register_singleton(
            BookService,
            BookService(book_repository=container.get(BookRepository))
        )
