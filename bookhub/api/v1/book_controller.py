"""
Book Controller
===============

FastAPI controller for the book catalogue.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from bookhub.api.v1.dependencies import get_book_service, require_auth
from bookhub.api.v1.errors import to_http_exception
from bookhub.application.dto.book_dto import BookCreateRequest, BookListResponse, BookResponse
from bookhub.application.dto.common_dto import ErrorResponse, Pagination
from bookhub.application.inputs import CreateBookInput
from bookhub.application.services.book_service import BookService
from bookhub.domain.models.book import Book

router = APIRouter(
    tags=["books"],
    dependencies=[Depends(require_auth)],
    responses={401: {"model": ErrorResponse}},
)


def to_book_response(book: Book) -> BookResponse:
    return BookResponse(
        id=book.id,
        title=book.title,
        author=book.author,
        isbn=book.isbn,
        published_year=book.published_year,
        total_copies=book.total_copies,
        available_copies=book.available_copies,
        availability_status=book.availability_status(),
        created_at=book.created_at,
        updated_at=book.updated_at,
    )


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Add a book",
    description="""
    Add a title to the catalogue.
    
    All copies start on the shelf (available_copies = total_copies).
    The ISBN must be 10 or 13 digits and unique.
    """
)
def create_book(
    request: BookCreateRequest,
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    try:
        book = service.create_book(
            CreateBookInput(
                title=request.title,
                author=request.author,
                isbn=request.isbn,
                published_year=request.published_year,
                total_copies=request.total_copies,
            )
        )
    except Exception as e:
        raise to_http_exception(e)
    return to_book_response(book)


@router.get(
    "",
    response_model=BookListResponse,
    summary="List books",
    description="Newest first. available=true keeps only books with a free copy.",
)
def list_books(
    page: int = Query(1),
    limit: int = Query(10),
    available: Optional[bool] = Query(None),
    service: BookService = Depends(get_book_service),
) -> BookListResponse:
    try:
        result = service.list_books(page=page, limit=limit, available_only=available)
    except Exception as e:
        raise to_http_exception(e)
    return BookListResponse(
        books=[to_book_response(b) for b in result.items],
        pagination=Pagination(
            page=result.page,
            limit=result.limit,
            total=result.total,
            total_pages=result.total_pages,
        ),
    )


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a book",
)
def get_book(
    book_id: str,
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    try:
        book = service.get_book(book_id)
    except Exception as e:
        raise to_http_exception(e)
    return to_book_response(book)
