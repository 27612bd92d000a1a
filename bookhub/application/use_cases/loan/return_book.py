"""
Return Book Use Case
====================

Closes an active loan and puts the copy back on the shelf.

The active -> returned transition is a conditional write that happens before
the copy counter moves, so two concurrent returns of the same loan can only
increment available_copies once.
"""
import logging

from bookhub.domain.exceptions import (
    BookNotFoundError,
    InvalidAvailableCopiesError,
    LoanAlreadyReturnedError,
    LoanNotFoundError,
)
from bookhub.domain.models.loan import LoanWithDetails
from bookhub.domain.repositories.book_repository import BookRepository
from bookhub.domain.repositories.loan_repository import LoanRepository

logger = logging.getLogger(__name__)


class ReturnBookUseCase:
    """Use case for returning a borrowed copy."""
    
    def __init__(self, loan_repository: LoanRepository, book_repository: BookRepository):
        self._loans = loan_repository
        self._books = book_repository
    
    def execute(self, loan_id: str) -> LoanWithDetails:
        """
        Execute the return workflow.
        
        Raises:
            LoanNotFoundError: No such loan
            LoanAlreadyReturnedError: Loan is already closed, or another
                request closed it first
            BookNotFoundError: The loan points at a book that no longer exists
            InvalidAvailableCopiesError: All copies are already on the shelf
        """
        details = self._loans.find_by_id_with_details(loan_id)
        if details is None:
            raise LoanNotFoundError()
        loan = details.loan
        
        loan.return_loan()
        
        book = self._books.find_by_id(loan.book_id)
        if book is None:
            raise BookNotFoundError()
        book.return_copy()
        
        closed = self._loans.mark_returned(loan.id, loan.returned_at)
        if closed is None:
            logger.info(f"Loan {loan.id} was closed by another request")
            raise LoanAlreadyReturnedError()
        
        if self._books.adjust_available_copies(book.id, 1) is None:
            logger.warning(f"Book {book.id} has every copy on the shelf, reopening loan {loan.id}")
            self._loans.reopen(loan.id)
            raise InvalidAvailableCopiesError()
        
        details.loan = closed
        logger.info(f"Loan {loan.id} returned: book {book.id} back on the shelf")
        return details
