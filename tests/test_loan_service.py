from datetime import timedelta

import pytest

from bookhub.application.inputs import BorrowBookInput, CreateBookInput, CreateUserInput
from bookhub.application.services.book_service import BookService
from bookhub.application.services.loan_service import LoanService
from bookhub.application.services.user_service import UserService
from bookhub.domain.exceptions import (
    BookNotAvailableError,
    BookNotFoundError,
    InvalidAvailableCopiesError,
    InvalidLoanDueDateError,
    LoanAlreadyReturnedError,
    LoanNotFoundError,
    UserDisabledError,
    UserHasActiveLoanError,
    UserNotFoundError,
)
from bookhub.domain.models.loan import LOAN_STATUS_ACTIVE, LOAN_STATUS_RETURNED
from bookhub.utils.datetime_utils import now


@pytest.fixture
def users(user_repo, hasher):
    return UserService(user_repo, hasher)


@pytest.fixture
def books(book_repo):
    return BookService(book_repo)


@pytest.fixture
def loans(loan_repo, book_repo, user_repo):
    return LoanService(loan_repo, book_repo, user_repo)


@pytest.fixture
def alice(users):
    return users.create_user(CreateUserInput("Alice Smith", "alice@example.com", "secret123"))


@pytest.fixture
def bob(users):
    return users.create_user(CreateUserInput("Bob Jones", "bob@example.com", "secret123"))


def add_book(books, copies=5, isbn="9780132350884"):
    return books.create_book(CreateBookInput(
        title="Clean Code",
        author="Robert C. Martin",
        isbn=isbn,
        published_year=2008,
        total_copies=copies,
    ))


def test_borrow_and_return_cycle(books, loans, alice):
    book = add_book(books)
    assert book.available_copies == 5
    
    details = loans.borrow_book(BorrowBookInput(alice.id, book.id))
    assert details.loan.status == LOAN_STATUS_ACTIVE
    assert details.user_name == "Alice Smith"
    assert details.book_title == "Clean Code"
    assert books.get_book(book.id).available_copies == 4
    
    returned = loans.return_book(details.loan.id)
    assert returned.loan.status == LOAN_STATUS_RETURNED
    assert returned.loan.returned_at is not None
    assert books.get_book(book.id).available_copies == 5
    assert loans.get_loan(details.loan.id).loan.status == LOAN_STATUS_RETURNED


def test_last_copy_cannot_be_borrowed_twice(books, loans, alice, bob):
    book = add_book(books, copies=1)
    loans.borrow_book(BorrowBookInput(alice.id, book.id))
    assert books.get_book(book.id).available_copies == 0
    
    with pytest.raises(BookNotAvailableError):
        loans.borrow_book(BorrowBookInput(bob.id, book.id))
    assert books.get_book(book.id).available_copies == 0


def test_same_user_same_book_while_active(books, loans, alice):
    book = add_book(books)
    first = loans.borrow_book(BorrowBookInput(alice.id, book.id))
    
    with pytest.raises(UserHasActiveLoanError):
        loans.borrow_book(BorrowBookInput(alice.id, book.id))
    
    loans.return_book(first.loan.id)
    second = loans.borrow_book(BorrowBookInput(alice.id, book.id))
    assert second.loan.id != first.loan.id


def test_user_may_borrow_distinct_titles(books, loans, alice):
    first = add_book(books, isbn="9780132350884")
    second = add_book(books, isbn="0132350882")
    loans.borrow_book(BorrowBookInput(alice.id, first.id))
    loans.borrow_book(BorrowBookInput(alice.id, second.id))
    assert loans.list_loans(user_id=alice.id).total == 2


def test_unknown_user(books, loans):
    book = add_book(books)
    with pytest.raises(UserNotFoundError):
        loans.borrow_book(BorrowBookInput("missing", book.id))


def test_disabled_user(books, users, loans, alice):
    book = add_book(books)
    users.disable_user(alice.id)
    with pytest.raises(UserDisabledError):
        loans.borrow_book(BorrowBookInput(alice.id, book.id))


def test_unknown_book(loans, alice):
    with pytest.raises(BookNotFoundError):
        loans.borrow_book(BorrowBookInput(alice.id, "missing"))


def test_past_due_date_leaves_copies_untouched(books, loans, alice):
    book = add_book(books)
    with pytest.raises(InvalidLoanDueDateError):
        loans.borrow_book(BorrowBookInput(alice.id, book.id, now() - timedelta(days=1)))
    assert books.get_book(book.id).available_copies == 5


def test_explicit_due_date(books, loans, alice):
    book = add_book(books)
    due = now() + timedelta(days=3)
    details = loans.borrow_book(BorrowBookInput(alice.id, book.id, due))
    assert details.loan.due_date == due


def test_return_twice(books, loans, alice):
    book = add_book(books)
    details = loans.borrow_book(BorrowBookInput(alice.id, book.id))
    loans.return_book(details.loan.id)
    
    with pytest.raises(LoanAlreadyReturnedError):
        loans.return_book(details.loan.id)
    assert books.get_book(book.id).available_copies == 5


def test_concurrent_return_counts_the_copy_once(books, loan_repo, loans, alice, bob, monkeypatch):
    book = add_book(books, copies=3)
    first = loans.borrow_book(BorrowBookInput(alice.id, book.id))
    loans.borrow_book(BorrowBookInput(bob.id, book.id))
    assert books.get_book(book.id).available_copies == 1
    
    # A second return of Alice's loan lands after the first one read the
    # loan as active but before it wrote the transition.
    original = loan_repo.mark_returned
    
    def interleaved(loan_id, returned_at):
        monkeypatch.setattr(loan_repo, "mark_returned", original)
        loans.return_book(first.loan.id)
        return original(loan_id, returned_at)
    
    monkeypatch.setattr(loan_repo, "mark_returned", interleaved)
    with pytest.raises(LoanAlreadyReturnedError):
        loans.return_book(first.loan.id)
    
    assert books.get_book(book.id).available_copies == 2
    assert loans.get_loan(first.loan.id).loan.status == LOAN_STATUS_RETURNED


def test_return_during_increment_is_rejected(books, book_repo, loans, alice, bob, monkeypatch):
    book = add_book(books, copies=3)
    first = loans.borrow_book(BorrowBookInput(alice.id, book.id))
    loans.borrow_book(BorrowBookInput(bob.id, book.id))
    
    original = book_repo.adjust_available_copies
    nested_errors = []
    
    def interleaved(book_id, delta):
        monkeypatch.setattr(book_repo, "adjust_available_copies", original)
        try:
            loans.return_book(first.loan.id)
        except LoanAlreadyReturnedError as e:
            nested_errors.append(e)
        return original(book_id, delta)
    
    monkeypatch.setattr(book_repo, "adjust_available_copies", interleaved)
    loans.return_book(first.loan.id)
    
    assert len(nested_errors) == 1
    assert books.get_book(book.id).available_copies == 2


def test_failed_increment_reopens_loan(books, book_repo, loans, alice, monkeypatch):
    book = add_book(books)
    details = loans.borrow_book(BorrowBookInput(alice.id, book.id))
    monkeypatch.setattr(book_repo, "adjust_available_copies", lambda book_id, delta: None)
    
    with pytest.raises(InvalidAvailableCopiesError):
        loans.return_book(details.loan.id)
    loan = loans.get_loan(details.loan.id).loan
    assert loan.status == LOAN_STATUS_ACTIVE
    assert loan.returned_at is None


def test_return_unknown_loan(loans):
    with pytest.raises(LoanNotFoundError):
        loans.return_book("missing")


def test_return_when_book_deleted(books, book_repo, loans, alice):
    book = add_book(books)
    details = loans.borrow_book(BorrowBookInput(alice.id, book.id))
    book_repo.delete(book.id)
    with pytest.raises(BookNotFoundError):
        loans.return_book(details.loan.id)


def test_lost_race_on_decrement(books, book_repo, loans, alice, monkeypatch):
    # Another request takes the copy between the read and the conditional write
    book = add_book(books)
    monkeypatch.setattr(book_repo, "adjust_available_copies", lambda book_id, delta: None)
    
    with pytest.raises(BookNotAvailableError):
        loans.borrow_book(BorrowBookInput(alice.id, book.id))
    assert loans.list_loans().total == 0


def test_failed_loan_insert_gives_copy_back(books, loan_repo, loans, alice, monkeypatch):
    book = add_book(books)
    
    def broken(loan):
        raise ConnectionError("insert failed")
    
    monkeypatch.setattr(loan_repo, "create", broken)
    with pytest.raises(ConnectionError):
        loans.borrow_book(BorrowBookInput(alice.id, book.id))
    assert books.get_book(book.id).available_copies == 5


def test_failed_active_loan_lookup_is_ignored(books, loan_repo, loans, alice, monkeypatch):
    book = add_book(books)
    
    def broken(user_id, book_id):
        raise ConnectionError("lookup failed")
    
    monkeypatch.setattr(loan_repo, "find_active_by_user_and_book", broken)
    details = loans.borrow_book(BorrowBookInput(alice.id, book.id))
    assert details.loan.status == LOAN_STATUS_ACTIVE


def test_list_filters_combine(books, loans, alice, bob):
    first = add_book(books, isbn="9780132350884")
    second = add_book(books, isbn="0132350882")
    a1 = loans.borrow_book(BorrowBookInput(alice.id, first.id))
    loans.borrow_book(BorrowBookInput(alice.id, second.id))
    loans.borrow_book(BorrowBookInput(bob.id, first.id))
    loans.return_book(a1.loan.id)
    
    assert loans.list_loans().total == 3
    assert loans.list_loans(user_id=alice.id).total == 2
    assert loans.list_loans(status=LOAN_STATUS_ACTIVE).total == 2
    
    result = loans.list_loans(user_id=alice.id, status=LOAN_STATUS_RETURNED)
    assert result.total == 1
    assert result.items[0].loan.id == a1.loan.id
    assert result.items[0].user_name == "Alice Smith"


def test_list_pagination_clamped(loans):
    page = loans.list_loans(page=-3, limit=1000)
    assert (page.page, page.limit) == (1, 100)
