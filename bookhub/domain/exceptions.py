"""
Domain Exceptions
=================

Every failure the domain can report is a named exception class.
Each carries a stable ``code`` that the HTTP layer passes through to clients
and a default message, so ``raise BookNotFoundError()`` is enough.

Categories:
- ValidationError: bad input rejected by a model constructor or mutator
- NotFoundError: a referenced record does not exist
- ConflictError: uniqueness / duplicate checks
- StateConflictError: a state transition that is not allowed right now
"""
from typing import Optional


class DomainError(Exception):
    """Base class for all domain errors."""
    code = "DOMAIN_ERROR"
    message = "domain error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(DomainError):
    code = "VALIDATION_ERROR"
    message = "validation error"


class NotFoundError(DomainError):
    code = "NOT_FOUND"
    message = "not found"


class ConflictError(DomainError):
    code = "CONFLICT"
    message = "conflict"


class StateConflictError(DomainError):
    code = "STATE_CONFLICT"
    message = "invalid state transition"


# Book

class InvalidBookTitleError(ValidationError):
    message = "invalid book title: must be between 1 and 200 characters"


class InvalidBookAuthorError(ValidationError):
    message = "invalid book author: must be between 1 and 100 characters"


class InvalidBookISBNError(ValidationError):
    message = "invalid ISBN: must be 10 or 13 digits"


class InvalidTotalCopiesError(ValidationError):
    message = "invalid total copies: must be at least 1"


class InvalidAvailableCopiesError(StateConflictError):
    code = "INVALID_AVAILABLE_COPIES"
    message = "invalid available copies"


class BookNotFoundError(NotFoundError):
    message = "book not found"


class BookNotAvailableError(StateConflictError):
    code = "BOOK_UNAVAILABLE"
    message = "book not available: all copies are borrowed"


class BookISBNAlreadyExistsError(InvalidBookISBNError, ConflictError):
    """Duplicate ISBN; still an InvalidBookISBNError for callers that only know that one."""
    code = "ISBN_EXISTS"
    message = "a book with this ISBN already exists"


# User

class InvalidUserNameError(ValidationError):
    message = "invalid user name: must be between 3 and 100 characters"


class InvalidUserEmailError(ValidationError):
    message = "invalid user email format"


class InvalidUserPasswordError(ValidationError):
    message = "invalid password: must be at least 6 characters"


class UserNotFoundError(NotFoundError):
    message = "user not found"


class UserDisabledError(StateConflictError):
    code = "USER_DISABLED"
    message = "user is disabled"


class UserAlreadyDisabledError(UserDisabledError):
    message = "user is already disabled"


class EmailAlreadyExistsError(ConflictError):
    code = "EMAIL_EXISTS"
    message = "email already exists"


# Loan

class LoanNotFoundError(NotFoundError):
    message = "loan not found"


class LoanAlreadyReturnedError(StateConflictError):
    code = "ALREADY_RETURNED"
    message = "loan already returned"


class InvalidLoanDueDateError(ValidationError):
    message = "invalid due date: must be in the future"


class UserHasActiveLoanError(ConflictError):
    code = "ACTIVE_LOAN_EXISTS"
    message = "user already has an active loan for this book"
