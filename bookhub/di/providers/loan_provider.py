from typing import TYPE_CHECKING

from ...application.services.loan_service import LoanService
from ...domain.repositories.book_repository import BookRepository
from ...domain.repositories.loan_repository import LoanRepository
from ...domain.repositories.user_repository import UserRepository

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class LoanProvider:
    """Loan service provider - registers the borrow/return service"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register loan service.
        The workflow needs all three repositories.
        """
        container.register_singleton(
            LoanService,
            LoanService(
                loan_repository=container.get(LoanRepository),
                book_repository=container.get(BookRepository),
                user_repository=container.get(UserRepository),
            )
        )
