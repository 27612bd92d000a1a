"""
Borrow Book Use Case
====================

Moves one copy of a book from the shelf to a user.

Steps:
1. Load user (UserNotFoundError / UserDisabledError)
2. Load book (BookNotFoundError / BookNotAvailableError)
3. Reject a second active loan of the same title by the same user
4. Build the loan (validates the due date)
5. Take the copy: entity check, then a conditional decrement in the store
6. Persist the loan, giving the copy back if that write fails
7. Return the loan with user name and book title
"""
import logging

from bookhub.application.inputs import BorrowBookInput
from bookhub.domain.exceptions import (
    BookNotAvailableError,
    BookNotFoundError,
    UserDisabledError,
    UserHasActiveLoanError,
    UserNotFoundError,
)
from bookhub.domain.models.loan import Loan, LoanWithDetails
from bookhub.domain.repositories.book_repository import BookRepository
from bookhub.domain.repositories.loan_repository import LoanRepository
from bookhub.domain.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class BorrowBookUseCase:
    """Use case for lending a book copy to a user."""
    
    def __init__(
        self,
        loan_repository: LoanRepository,
        book_repository: BookRepository,
        user_repository: UserRepository,
    ):
        self._loans = loan_repository
        self._books = book_repository
        self._users = user_repository
    
    def execute(self, data: BorrowBookInput) -> LoanWithDetails:
        """
        Execute the borrow workflow.
        
        Returns:
            The new active loan, enriched for display
        """
        user = self._users.find_by_id(data.user_id)
        if user is None:
            raise UserNotFoundError()
        if not user.is_active():
            raise UserDisabledError()
        
        book = self._books.find_by_id(data.book_id)
        if book is None:
            raise BookNotFoundError()
        if not book.is_available():
            raise BookNotAvailableError()
        
        # Best-effort: a lookup failure counts as "no active loan"
        try:
            existing = self._loans.find_active_by_user_and_book(data.user_id, data.book_id)
        except Exception as e:
            logger.warning(f"Active loan lookup failed for user {data.user_id}, continuing: {e}")
            existing = None
        if existing is not None:
            raise UserHasActiveLoanError()
        
        loan = Loan.create(data.user_id, data.book_id, data.due_date)
        
        book.borrow_copy()
        updated_book = self._books.adjust_available_copies(book.id, -1)
        if updated_book is None:
            # Another request took the last copy between our read and write
            logger.info(f"Book {book.id} ran out of copies before the decrement")
            raise BookNotAvailableError()
        
        try:
            self._loans.create(loan)
        except Exception:
            logger.warning(f"Loan insert failed, giving copy of book {book.id} back")
            self._books.adjust_available_copies(book.id, 1)
            raise
        
        logger.info(
            f"Loan {loan.id} opened: user {user.id} borrowed book {book.id} "
            f"({updated_book.available_copies}/{updated_book.total_copies} left)"
        )
        return LoanWithDetails(loan=loan, user_name=user.name, book_title=book.title)
