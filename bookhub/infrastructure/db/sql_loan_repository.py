"""
SQL Loan Repository
===================

Concrete implementation of LoanRepository using SQLAlchemy.
Enriched reads join users and books in one query.
"""
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func, select, update

from bookhub.domain.models.loan import (
    LOAN_STATUS_ACTIVE,
    LOAN_STATUS_RETURNED,
    Loan,
    LoanWithDetails,
)
from bookhub.domain.repositories.loan_repository import LoanRepository
from bookhub.infrastructure.db.sql_connection import SqlDatabase
from bookhub.infrastructure.db.sql_models import BookRecord, LoanRecord, UserRecord
from bookhub.utils.datetime_utils import ensure_aware, to_utc
from bookhub.utils.pagination import offset_for


class SqlLoanRepository(LoanRepository):
    """SQLAlchemy implementation of LoanRepository."""
    
    def __init__(self, database: SqlDatabase):
        self._db = database
    
    @staticmethod
    def _to_entity(record: LoanRecord) -> Loan:
        return Loan(
            id=record.id,
            user_id=record.user_id,
            book_id=record.book_id,
            borrowed_at=ensure_aware(record.borrowed_at),
            due_date=ensure_aware(record.due_date),
            returned_at=ensure_aware(record.returned_at),
            status=record.status,
        )
    
    @staticmethod
    def _filters(user_id: Optional[str], status: Optional[str]) -> list:
        filters = []
        if user_id:
            filters.append(LoanRecord.user_id == user_id)
        if status:
            filters.append(LoanRecord.status == status)
        return filters
    
    @staticmethod
    def _details_query():
        # Outer joins so a dangling reference still yields the loan
        return (
            select(
                LoanRecord,
                func.coalesce(UserRecord.name, ""),
                func.coalesce(BookRecord.title, ""),
            )
            .outerjoin(UserRecord, UserRecord.id == LoanRecord.user_id)
            .outerjoin(BookRecord, BookRecord.id == LoanRecord.book_id)
        )
    
    def create(self, loan: Loan) -> Loan:
        record = LoanRecord(
            id=loan.id,
            user_id=loan.user_id,
            book_id=loan.book_id,
            borrowed_at=to_utc(loan.borrowed_at),
            due_date=to_utc(loan.due_date),
            returned_at=to_utc(loan.returned_at),
            status=loan.status,
        )
        with self._db.transaction() as session:
            session.add(record)
        return loan
    
    def find_by_id(self, loan_id: str) -> Optional[Loan]:
        with self._db.session() as session:
            record = session.get(LoanRecord, loan_id)
            return self._to_entity(record) if record else None
    
    def find_active_by_user_and_book(self, user_id: str, book_id: str) -> Optional[Loan]:
        with self._db.session() as session:
            record = session.scalars(
                select(LoanRecord).where(
                    LoanRecord.user_id == user_id,
                    LoanRecord.book_id == book_id,
                    LoanRecord.status == LOAN_STATUS_ACTIVE,
                )
            ).first()
            return self._to_entity(record) if record else None
    
    def list(
        self,
        page: int,
        limit: int,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Tuple[List[Loan], int]:
        filters = self._filters(user_id, status)
        with self._db.session() as session:
            total = session.scalar(
                select(func.count()).select_from(LoanRecord).where(*filters)
            )
            records = session.scalars(
                select(LoanRecord)
                .where(*filters)
                .order_by(LoanRecord.borrowed_at.desc(), LoanRecord.id)
                .offset(offset_for(page, limit))
                .limit(limit)
            ).all()
            return [self._to_entity(r) for r in records], total or 0
    
    def update(self, loan: Loan) -> Loan:
        """Persist status, returned_at and due_date."""
        with self._db.transaction() as session:
            record = session.get(LoanRecord, loan.id)
            if record is None:
                raise ValueError(f"Loan '{loan.id}' not found")
            record.status = loan.status
            record.returned_at = to_utc(loan.returned_at)
            record.due_date = to_utc(loan.due_date)
        return loan
    
    def mark_returned(self, loan_id: str, returned_at: datetime) -> Optional[Loan]:
        """Conditional UPDATE on status='active'; None when zero rows match."""
        with self._db.transaction() as session:
            result = session.execute(
                update(LoanRecord)
                .where(LoanRecord.id == loan_id, LoanRecord.status == LOAN_STATUS_ACTIVE)
                .values(status=LOAN_STATUS_RETURNED, returned_at=to_utc(returned_at))
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                return None
            record = session.get(LoanRecord, loan_id)
            return self._to_entity(record)
    
    def reopen(self, loan_id: str) -> None:
        with self._db.transaction() as session:
            session.execute(
                update(LoanRecord)
                .where(LoanRecord.id == loan_id, LoanRecord.status == LOAN_STATUS_RETURNED)
                .values(status=LOAN_STATUS_ACTIVE, returned_at=None)
                .execution_options(synchronize_session=False)
            )
    
    def find_by_id_with_details(self, loan_id: str) -> Optional[LoanWithDetails]:
        with self._db.session() as session:
            row = session.execute(
                self._details_query().where(LoanRecord.id == loan_id)
            ).first()
            if row is None:
                return None
            record, user_name, book_title = row
            return LoanWithDetails(
                loan=self._to_entity(record),
                user_name=user_name,
                book_title=book_title,
            )
    
    def list_with_details(
        self,
        page: int,
        limit: int,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Tuple[List[LoanWithDetails], int]:
        filters = self._filters(user_id, status)
        with self._db.session() as session:
            total = session.scalar(
                select(func.count()).select_from(LoanRecord).where(*filters)
            )
            rows = session.execute(
                self._details_query()
                .where(*filters)
                .order_by(LoanRecord.borrowed_at.desc(), LoanRecord.id)
                .offset(offset_for(page, limit))
                .limit(limit)
            ).all()
            return [
                LoanWithDetails(
                    loan=self._to_entity(record),
                    user_name=user_name,
                    book_title=book_title,
                )
                for record, user_name, book_title in rows
            ], total or 0
