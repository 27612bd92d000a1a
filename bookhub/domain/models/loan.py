"""
Loan Model
==========

Domain model for one book copy lent to one user.

State machine: "active" -> "returned" (terminal). return_loan() is the
only transition.
"""
import uuid
from datetime import datetime, timedelta
from typing import Optional
from dataclasses import dataclass, field

from bookhub.domain.exceptions import InvalidLoanDueDateError, LoanAlreadyReturnedError
from bookhub.utils.datetime_utils import now

LOAN_STATUS_ACTIVE = "active"
LOAN_STATUS_RETURNED = "returned"
LOAN_STATUSES = (LOAN_STATUS_ACTIVE, LOAN_STATUS_RETURNED)

DEFAULT_LOAN_DAYS = 14


@dataclass
class Loan:
    """Loan domain model. user_id / book_id are references, not owned objects."""
    id: str
    user_id: str
    book_id: str
    borrowed_at: datetime
    due_date: datetime
    returned_at: Optional[datetime] = None
    status: str = LOAN_STATUS_ACTIVE
    
    @classmethod
    def create(
        cls,
        user_id: str,
        book_id: str,
        due_date: Optional[datetime] = None,
    ) -> "Loan":
        """
        Open a new active loan.
        
        Args:
            user_id: Borrower
            book_id: Borrowed title
            due_date: Must be strictly after now; defaults to now + 14 days
        
        Raises:
            InvalidLoanDueDateError: due_date is not in the future
        """
        borrowed_at = now()
        if due_date is not None:
            if due_date.tzinfo is None:
                due_date = due_date.replace(tzinfo=borrowed_at.tzinfo)
            if due_date <= borrowed_at:
                raise InvalidLoanDueDateError()
            due = due_date
        else:
            due = borrowed_at + timedelta(days=DEFAULT_LOAN_DAYS)
        
        return cls(
            id=str(uuid.uuid4()),
            user_id=user_id,
            book_id=book_id,
            borrowed_at=borrowed_at,
            due_date=due,
        )
    
    def return_loan(self) -> None:
        """Close the loan. Not idempotent."""
        if self.status == LOAN_STATUS_RETURNED:
            raise LoanAlreadyReturnedError()
        self.returned_at = now()
        self.status = LOAN_STATUS_RETURNED
    
    def is_active(self) -> bool:
        return self.status == LOAN_STATUS_ACTIVE
    
    def is_overdue(self, at: Optional[datetime] = None) -> bool:
        """True only while active and past the due date."""
        if not self.is_active():
            return False
        return (at or now()) > self.due_date


@dataclass
class LoanWithDetails:
    """A loan plus the borrower's name and the book's title, for display."""
    loan: Loan
    user_name: str = ""
    book_title: str = ""
