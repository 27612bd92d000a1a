"""
SQL Book Repository
===================

Concrete implementation of BookRepository using SQLAlchemy.
"""
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError

from bookhub.domain.constants.book_fields import BookFields
from bookhub.domain.exceptions import BookISBNAlreadyExistsError
from bookhub.domain.models.book import Book
from bookhub.domain.repositories.book_repository import BookRepository
from bookhub.infrastructure.db.sql_connection import SqlDatabase
from bookhub.infrastructure.db.sql_models import BookRecord
from bookhub.utils.datetime_utils import ensure_aware, now, to_utc
from bookhub.utils.pagination import offset_for


def _is_isbn_violation(error: IntegrityError) -> bool:
    return BookFields.ISBN in str(error.orig).lower()


class SqlBookRepository(BookRepository):
    """
    SQLAlchemy implementation of BookRepository.
    
    adjust_available_copies is a single conditional UPDATE; the check
    constraint on the table backs it up.
    """
    
    def __init__(self, database: SqlDatabase):
        self._db = database
    
    @staticmethod
    def _to_entity(record: BookRecord) -> Book:
        return Book(
            id=record.id,
            title=record.title,
            author=record.author,
            isbn=record.isbn,
            published_year=record.published_year,
            total_copies=record.total_copies,
            available_copies=record.available_copies,
            created_at=ensure_aware(record.created_at),
            updated_at=ensure_aware(record.updated_at),
        )
    
    @staticmethod
    def _apply(record: BookRecord, book: Book) -> None:
        record.title = book.title
        record.author = book.author
        record.isbn = book.isbn
        record.published_year = book.published_year
        record.total_copies = book.total_copies
        record.available_copies = book.available_copies
        record.updated_at = to_utc(book.updated_at)
    
    def create(self, book: Book) -> Book:
        record = BookRecord(id=book.id, created_at=to_utc(book.created_at))
        self._apply(record, book)
        try:
            with self._db.transaction() as session:
                session.add(record)
        except IntegrityError as e:
            if _is_isbn_violation(e):
                raise BookISBNAlreadyExistsError()
            raise
        return book
    
    def find_by_id(self, book_id: str) -> Optional[Book]:
        with self._db.session() as session:
            record = session.get(BookRecord, book_id)
            return self._to_entity(record) if record else None
    
    def find_by_isbn(self, isbn: str) -> Optional[Book]:
        with self._db.session() as session:
            record = session.scalars(
                select(BookRecord).where(BookRecord.isbn == isbn)
            ).first()
            return self._to_entity(record) if record else None
    
    def list(
        self,
        page: int,
        limit: int,
        available_only: Optional[bool] = None,
    ) -> Tuple[List[Book], int]:
        """List books, newest first, optionally filtered by availability."""
        filters = []
        if available_only is True:
            filters.append(BookRecord.available_copies > 0)
        elif available_only is False:
            filters.append(BookRecord.available_copies <= 0)
        
        with self._db.session() as session:
            total = session.scalar(
                select(func.count()).select_from(BookRecord).where(*filters)
            )
            records = session.scalars(
                select(BookRecord)
                .where(*filters)
                .order_by(BookRecord.created_at.desc(), BookRecord.id)
                .offset(offset_for(page, limit))
                .limit(limit)
            ).all()
            return [self._to_entity(r) for r in records], total or 0
    
    def update(self, book: Book) -> Book:
        try:
            with self._db.transaction() as session:
                record = session.get(BookRecord, book.id)
                if record is None:
                    raise ValueError(f"Book '{book.id}' not found")
                self._apply(record, book)
        except IntegrityError as e:
            if _is_isbn_violation(e):
                raise BookISBNAlreadyExistsError()
            raise
        return book
    
    def adjust_available_copies(self, book_id: str, delta: int) -> Optional[Book]:
        """UPDATE ... WHERE available_copies + delta BETWEEN 0 AND total_copies."""
        new_value = BookRecord.available_copies + delta
        stmt = (
            update(BookRecord)
            .where(
                BookRecord.id == book_id,
                new_value >= 0,
                new_value <= BookRecord.total_copies,
            )
            .values(available_copies=new_value, updated_at=to_utc(now()))
            .execution_options(synchronize_session=False)
        )
        with self._db.transaction() as session:
            result = session.execute(stmt)
            if result.rowcount == 0:
                return None
            record = session.get(BookRecord, book_id)
            return self._to_entity(record)
    
    def delete(self, book_id: str) -> bool:
        with self._db.transaction() as session:
            result = session.execute(delete(BookRecord).where(BookRecord.id == book_id))
            return result.rowcount > 0
