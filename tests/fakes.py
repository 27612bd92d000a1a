"""In-memory repositories for service tests."""
import copy
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from bookhub.domain.exceptions import BookISBNAlreadyExistsError, EmailAlreadyExistsError
from bookhub.domain.models.book import Book
from bookhub.domain.models.loan import LOAN_STATUS_ACTIVE, LOAN_STATUS_RETURNED, Loan, LoanWithDetails
from bookhub.domain.models.user import User
from bookhub.domain.repositories.book_repository import BookRepository
from bookhub.domain.repositories.loan_repository import LoanRepository
from bookhub.domain.repositories.user_repository import UserRepository
from bookhub.utils.datetime_utils import now
from bookhub.utils.pagination import offset_for


def _page(items: list, page: int, limit: int) -> list:
    start = offset_for(page, limit)
    return items[start:start + limit]


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self.users: Dict[str, User] = {}
    
    def create(self, user: User) -> User:
        if any(u.email == user.email for u in self.users.values()):
            raise EmailAlreadyExistsError()
        self.users[user.id] = copy.deepcopy(user)
        return user
    
    def find_by_id(self, user_id: str) -> Optional[User]:
        user = self.users.get(user_id)
        return copy.deepcopy(user) if user else None
    
    def find_by_email(self, email: str) -> Optional[User]:
        for user in self.users.values():
            if user.email == email:
                return copy.deepcopy(user)
        return None
    
    def list(self, page: int, limit: int) -> Tuple[List[User], int]:
        users = sorted(self.users.values(), key=lambda u: u.created_at, reverse=True)
        return [copy.deepcopy(u) for u in _page(users, page, limit)], len(users)
    
    def update(self, user: User) -> User:
        if user.id not in self.users:
            raise ValueError(f"User '{user.id}' not found")
        if any(u.email == user.email and u.id != user.id for u in self.users.values()):
            raise EmailAlreadyExistsError()
        self.users[user.id] = copy.deepcopy(user)
        return user
    
    def delete(self, user_id: str) -> bool:
        return self.users.pop(user_id, None) is not None


class InMemoryBookRepository(BookRepository):
    def __init__(self):
        self.books: Dict[str, Book] = {}
    
    def create(self, book: Book) -> Book:
        if any(b.isbn == book.isbn for b in self.books.values()):
            raise BookISBNAlreadyExistsError()
        self.books[book.id] = copy.deepcopy(book)
        return book
    
    def find_by_id(self, book_id: str) -> Optional[Book]:
        book = self.books.get(book_id)
        return copy.deepcopy(book) if book else None
    
    def find_by_isbn(self, isbn: str) -> Optional[Book]:
        for book in self.books.values():
            if book.isbn == isbn:
                return copy.deepcopy(book)
        return None
    
    def list(
        self,
        page: int,
        limit: int,
        available_only: Optional[bool] = None,
    ) -> Tuple[List[Book], int]:
        books = sorted(self.books.values(), key=lambda b: b.created_at, reverse=True)
        if available_only is not None:
            books = [b for b in books if b.is_available() == available_only]
        return [copy.deepcopy(b) for b in _page(books, page, limit)], len(books)
    
    def update(self, book: Book) -> Book:
        if book.id not in self.books:
            raise ValueError(f"Book '{book.id}' not found")
        self.books[book.id] = copy.deepcopy(book)
        return book
    
    def adjust_available_copies(self, book_id: str, delta: int) -> Optional[Book]:
        book = self.books.get(book_id)
        if book is None:
            return None
        if not 0 <= book.available_copies + delta <= book.total_copies:
            return None
        book.available_copies += delta
        book.updated_at = now()
        return copy.deepcopy(book)
    
    def delete(self, book_id: str) -> bool:
        return self.books.pop(book_id, None) is not None


class InMemoryLoanRepository(LoanRepository):
    def __init__(self, users: InMemoryUserRepository, books: InMemoryBookRepository):
        self.loans: Dict[str, Loan] = {}
        self._users = users
        self._books = books
    
    def _details(self, loan: Loan) -> LoanWithDetails:
        user = self._users.users.get(loan.user_id)
        book = self._books.books.get(loan.book_id)
        return LoanWithDetails(
            loan=copy.deepcopy(loan),
            user_name=user.name if user else "",
            book_title=book.title if book else "",
        )
    
    def _filtered(self, user_id: Optional[str], status: Optional[str]) -> List[Loan]:
        loans = sorted(self.loans.values(), key=lambda l: l.borrowed_at, reverse=True)
        if user_id:
            loans = [l for l in loans if l.user_id == user_id]
        if status:
            loans = [l for l in loans if l.status == status]
        return loans
    
    def create(self, loan: Loan) -> Loan:
        self.loans[loan.id] = copy.deepcopy(loan)
        return loan
    
    def find_by_id(self, loan_id: str) -> Optional[Loan]:
        loan = self.loans.get(loan_id)
        return copy.deepcopy(loan) if loan else None
    
    def find_active_by_user_and_book(self, user_id: str, book_id: str) -> Optional[Loan]:
        for loan in self.loans.values():
            if loan.user_id == user_id and loan.book_id == book_id and loan.status == LOAN_STATUS_ACTIVE:
                return copy.deepcopy(loan)
        return None
    
    def list(
        self,
        page: int,
        limit: int,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Tuple[List[Loan], int]:
        loans = self._filtered(user_id, status)
        return [copy.deepcopy(l) for l in _page(loans, page, limit)], len(loans)
    
    def update(self, loan: Loan) -> Loan:
        if loan.id not in self.loans:
            raise ValueError(f"Loan '{loan.id}' not found")
        self.loans[loan.id] = copy.deepcopy(loan)
        return loan
    
    def mark_returned(self, loan_id: str, returned_at: datetime) -> Optional[Loan]:
        loan = self.loans.get(loan_id)
        if loan is None or loan.status != LOAN_STATUS_ACTIVE:
            return None
        loan.status = LOAN_STATUS_RETURNED
        loan.returned_at = returned_at
        return copy.deepcopy(loan)
    
    def reopen(self, loan_id: str) -> None:
        loan = self.loans.get(loan_id)
        if loan is not None and loan.status == LOAN_STATUS_RETURNED:
            loan.status = LOAN_STATUS_ACTIVE
            loan.returned_at = None
    
    def find_by_id_with_details(self, loan_id: str) -> Optional[LoanWithDetails]:
        loan = self.loans.get(loan_id)
        return self._details(loan) if loan else None
    
    def list_with_details(
        self,
        page: int,
        limit: int,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Tuple[List[LoanWithDetails], int]:
        loans = self._filtered(user_id, status)
        return [self._details(l) for l in _page(loans, page, limit)], len(loans)
