"""
Loan Controller
===============

FastAPI controller for borrowing and returning books.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from bookhub.api.v1.dependencies import get_loan_service, require_auth
from bookhub.api.v1.errors import http_error, to_http_exception
from bookhub.application.dto.common_dto import ErrorResponse, Pagination
from bookhub.application.dto.loan_dto import LoanCreateRequest, LoanListResponse, LoanResponse
from bookhub.application.inputs import BorrowBookInput
from bookhub.application.services.loan_service import LoanService
from bookhub.domain.exceptions import ValidationError
from bookhub.domain.models.loan import LOAN_STATUSES, LoanWithDetails

router = APIRouter(
    tags=["loans"],
    dependencies=[Depends(require_auth)],
    responses={401: {"model": ErrorResponse}},
)


def to_loan_response(details: LoanWithDetails) -> LoanResponse:
    loan = details.loan
    return LoanResponse(
        id=loan.id,
        user_id=loan.user_id,
        book_id=loan.book_id,
        user_name=details.user_name,
        book_title=details.book_title,
        borrowed_at=loan.borrowed_at,
        due_date=loan.due_date,
        returned_at=loan.returned_at,
        status=loan.status,
        overdue=loan.is_overdue(),
    )


@router.post(
    "",
    response_model=LoanResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Borrow a book",
    description="""
    Lend one copy of a book to a user.
    
    Fails when the user is missing or disabled, the book is missing or has
    no free copy, or the user already has an active loan of the same book.
    """
)
def borrow_book(
    request: LoanCreateRequest,
    service: LoanService = Depends(get_loan_service),
) -> LoanResponse:
    try:
        details = service.borrow_book(
            BorrowBookInput(
                user_id=request.user_id,
                book_id=request.book_id,
                due_date=request.due_date,
            )
        )
    except Exception as e:
        raise to_http_exception(e)
    return to_loan_response(details)


@router.get(
    "",
    response_model=LoanListResponse,
    responses={400: {"model": ErrorResponse}},
    summary="List loans",
    description="Newest first. user_id and status filters combine with AND.",
)
def list_loans(
    page: int = Query(1),
    limit: int = Query(10),
    user_id: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    service: LoanService = Depends(get_loan_service),
) -> LoanListResponse:
    if status_filter and status_filter not in LOAN_STATUSES:
        raise http_error(
            status.HTTP_400_BAD_REQUEST,
            f"invalid status filter: expected one of {', '.join(LOAN_STATUSES)}",
            ValidationError.code,
        )
    try:
        result = service.list_loans(
            page=page, limit=limit, user_id=user_id, status=status_filter
        )
    except Exception as e:
        raise to_http_exception(e)
    return LoanListResponse(
        loans=[to_loan_response(d) for d in result.items],
        pagination=Pagination(
            page=result.page,
            limit=result.limit,
            total=result.total,
            total_pages=result.total_pages,
        ),
    )


@router.get(
    "/{loan_id}",
    response_model=LoanResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a loan",
)
def get_loan(
    loan_id: str,
    service: LoanService = Depends(get_loan_service),
) -> LoanResponse:
    try:
        details = service.get_loan(loan_id)
    except Exception as e:
        raise to_http_exception(e)
    return to_loan_response(details)


@router.post(
    "/{loan_id}/return",
    response_model=LoanResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Return a book",
)
def return_book(
    loan_id: str,
    service: LoanService = Depends(get_loan_service),
) -> LoanResponse:
    try:
        details = service.return_book(loan_id)
    except Exception as e:
        raise to_http_exception(e)
    return to_loan_response(details)
