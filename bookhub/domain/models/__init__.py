"""
Domain Models
=============

Pure domain objects with no infrastructure dependencies.
"""
from .book import Book, is_valid_isbn
from .user import User, is_valid_email
from .loan import Loan, LoanWithDetails, LOAN_STATUS_ACTIVE, LOAN_STATUS_RETURNED, DEFAULT_LOAN_DAYS

__all__ = [
    "Book",
    "is_valid_isbn",
    "User",
    "is_valid_email",
    "Loan",
    "LoanWithDetails",
    "LOAN_STATUS_ACTIVE",
    "LOAN_STATUS_RETURNED",
    "DEFAULT_LOAN_DAYS",
]
