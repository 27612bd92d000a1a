"""
SQL User Repository
===================

Concrete implementation of UserRepository using SQLAlchemy.
"""
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from bookhub.domain.constants.user_fields import UserFields
from bookhub.domain.exceptions import EmailAlreadyExistsError
from bookhub.domain.models.user import User
from bookhub.domain.repositories.user_repository import UserRepository
from bookhub.infrastructure.db.sql_connection import SqlDatabase
from bookhub.infrastructure.db.sql_models import UserRecord
from bookhub.utils.datetime_utils import ensure_aware, to_utc
from bookhub.utils.pagination import offset_for


def _is_email_violation(error: IntegrityError) -> bool:
    return UserFields.EMAIL in str(error.orig).lower()


class SqlUserRepository(UserRepository):
    """SQLAlchemy implementation of UserRepository."""
    
    def __init__(self, database: SqlDatabase):
        self._db = database
    
    @staticmethod
    def _to_entity(record: UserRecord) -> User:
        return User(
            id=record.id,
            name=record.name,
            email=record.email,
            password_hash=record.password_hash,
            active=record.active,
            created_at=ensure_aware(record.created_at),
            updated_at=ensure_aware(record.updated_at),
        )
    
    @staticmethod
    def _apply(record: UserRecord, user: User) -> None:
        record.name = user.name
        record.email = user.email
        record.password_hash = user.password_hash
        record.active = user.active
        record.updated_at = to_utc(user.updated_at)
    
    def create(self, user: User) -> User:
        record = UserRecord(id=user.id, created_at=to_utc(user.created_at))
        self._apply(record, user)
        try:
            with self._db.transaction() as session:
                session.add(record)
        except IntegrityError as e:
            if _is_email_violation(e):
                raise EmailAlreadyExistsError()
            raise
        return user
    
    def find_by_id(self, user_id: str) -> Optional[User]:
        with self._db.session() as session:
            record = session.get(UserRecord, user_id)
            return self._to_entity(record) if record else None
    
    def find_by_email(self, email: str) -> Optional[User]:
        with self._db.session() as session:
            record = session.scalars(
                select(UserRecord).where(UserRecord.email == email)
            ).first()
            return self._to_entity(record) if record else None
    
    def list(self, page: int, limit: int) -> Tuple[List[User], int]:
        """List users, newest first."""
        with self._db.session() as session:
            total = session.scalar(select(func.count()).select_from(UserRecord))
            records = session.scalars(
                select(UserRecord)
                .order_by(UserRecord.created_at.desc(), UserRecord.id)
                .offset(offset_for(page, limit))
                .limit(limit)
            ).all()
            return [self._to_entity(r) for r in records], total or 0
    
    def update(self, user: User) -> User:
        try:
            with self._db.transaction() as session:
                record = session.get(UserRecord, user.id)
                if record is None:
                    raise ValueError(f"User '{user.id}' not found")
                self._apply(record, user)
        except IntegrityError as e:
            if _is_email_violation(e):
                raise EmailAlreadyExistsError()
            raise
        return user
    
    def delete(self, user_id: str) -> bool:
        with self._db.transaction() as session:
            result = session.execute(delete(UserRecord).where(UserRecord.id == user_id))
            return result.rowcount > 0
