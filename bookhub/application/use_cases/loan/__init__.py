from .borrow_book import BorrowBookUseCase
from .return_book import ReturnBookUseCase

__all__ = ["BorrowBookUseCase", "ReturnBookUseCase"]
