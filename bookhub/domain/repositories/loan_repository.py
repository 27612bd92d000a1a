"""
Loan Repository Interface
=========================

Abstract interface for loan data access, including the enriched
(user name + book title) reads used for display.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from bookhub.domain.models.loan import Loan, LoanWithDetails


class LoanRepository(ABC):
    """Abstract repository for loan persistence operations."""
    
    @abstractmethod
    def create(self, loan: Loan) -> Loan:
        """Persist a new loan."""
        pass
    
    @abstractmethod
    def find_by_id(self, loan_id: str) -> Optional[Loan]:
        """Find a loan by its ID, None if absent."""
        pass
    
    @abstractmethod
    def find_active_by_user_and_book(self, user_id: str, book_id: str) -> Optional[Loan]:
        """
        Find the active loan of a (user, book) pair.
        
        Returns:
            The active loan if one exists, None otherwise
        """
        pass
    
    @abstractmethod
    def list(
        self,
        page: int,
        limit: int,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Tuple[List[Loan], int]:
        """
        List one page of loans, most recently borrowed first.
        
        Filters are combined with AND when both are given.
        
        Returns:
            (loans on the page, total matching loans)
        """
        pass
    
    @abstractmethod
    def update(self, loan: Loan) -> Loan:
        """Persist the status / returned_at of an existing loan."""
        pass
    
    @abstractmethod
    def mark_returned(self, loan_id: str, returned_at: datetime) -> Optional[Loan]:
        """
        Atomically move an active loan to "returned".
        
        Returns:
            The closed loan, or None when no active loan with that id exists
            (already returned, possibly by a concurrent request)
        """
        pass
    
    @abstractmethod
    def reopen(self, loan_id: str) -> None:
        """Put a returned loan back to "active" and clear returned_at."""
        pass
    
    @abstractmethod
    def find_by_id_with_details(self, loan_id: str) -> Optional[LoanWithDetails]:
        """
        Find a loan together with the borrower's name and the book's title.
        
        A dangling user or book reference yields an empty name / title.
        """
        pass
    
    @abstractmethod
    def list_with_details(
        self,
        page: int,
        limit: int,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Tuple[List[LoanWithDetails], int]:
        """Same as list(), enriched with user name and book title."""
        pass
