"""
Repository Interfaces
=====================

Storage-agnostic contracts the application layer depends on.
A miss is reported as ``None``, never as an exception.
"""
from .user_repository import UserRepository
from .book_repository import BookRepository
from .loan_repository import LoanRepository

__all__ = ["UserRepository", "BookRepository", "LoanRepository"]
