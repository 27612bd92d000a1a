"""
Loan Service
============

Application service for the borrow/return workflow and loan reads.
"""
from typing import Optional

from bookhub.application.inputs import BorrowBookInput
from bookhub.application.use_cases.loan.borrow_book import BorrowBookUseCase
from bookhub.application.use_cases.loan.return_book import ReturnBookUseCase
from bookhub.domain.exceptions import LoanNotFoundError
from bookhub.domain.models.loan import LoanWithDetails
from bookhub.domain.repositories.book_repository import BookRepository
from bookhub.domain.repositories.loan_repository import LoanRepository
from bookhub.domain.repositories.user_repository import UserRepository
from bookhub.utils.pagination import Page, clamp_pagination


class LoanService:
    """
    Application service for loan operations.
    
    Every read returns enriched loans (user name + book title).
    """
    
    def __init__(
        self,
        loan_repository: LoanRepository,
        book_repository: BookRepository,
        user_repository: UserRepository,
    ):
        """
        Initialize service with the three repositories the workflow touches.
        
        Args:
            loan_repository: Repository for loan persistence
            book_repository: Repository for book persistence (copy counters)
            user_repository: Repository for user lookups
        """
        self._repository = loan_repository
        self._borrow_use_case = BorrowBookUseCase(loan_repository, book_repository, user_repository)
        self._return_use_case = ReturnBookUseCase(loan_repository, book_repository)
    
    def borrow_book(self, data: BorrowBookInput) -> LoanWithDetails:
        return self._borrow_use_case.execute(data)
    
    def return_book(self, loan_id: str) -> LoanWithDetails:
        return self._return_use_case.execute(loan_id)
    
    def get_loan(self, loan_id: str) -> LoanWithDetails:
        """
        Get an enriched loan by ID.
        
        Raises:
            LoanNotFoundError: No loan with that ID
        """
        details = self._repository.find_by_id_with_details(loan_id)
        if details is None:
            raise LoanNotFoundError()
        return details
    
    def list_loans(
        self,
        page: int = 1,
        limit: int = 10,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Page[LoanWithDetails]:
        """
        List enriched loans, newest first. Filters combine with AND.
        
        Args:
            page: 1-based page number (clamped)
            limit: Page size (clamped to 1..100)
            user_id: Only loans of this user
            status: Only loans in this status ('active' or 'returned')
        """
        page, limit = clamp_pagination(page, limit)
        loans, total = self._repository.list_with_details(
            page, limit, user_id=user_id, status=status
        )
        return Page(items=loans, total=total, page=page, limit=limit)
