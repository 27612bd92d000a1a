"""
MongoDB Loan Repository
=======================

Concrete implementation of LoanRepository using MongoDB.
Enriched reads resolve the user name and book title with one lookup each.
"""
from datetime import datetime
from typing import List, Optional, Tuple

from pymongo import DESCENDING, ReturnDocument

from bookhub.core.config import get_settings
from bookhub.domain.constants.book_fields import BookFields
from bookhub.domain.constants.loan_fields import LoanFields
from bookhub.domain.constants.user_fields import UserFields
from bookhub.domain.models.loan import (
    LOAN_STATUS_ACTIVE,
    LOAN_STATUS_RETURNED,
    Loan,
    LoanWithDetails,
)
from bookhub.domain.repositories.loan_repository import LoanRepository
from bookhub.infrastructure.db.mongo_connection import MongoClientManager, get_mongo_client
from bookhub.utils.datetime_utils import ensure_aware, to_utc
from bookhub.utils.pagination import offset_for


class MongoLoanRepository(LoanRepository):
    """MongoDB implementation of LoanRepository."""
    
    def __init__(self, client: Optional[MongoClientManager] = None):
        """Initialize repository with MongoDB client."""
        settings = get_settings()
        self._client = client or get_mongo_client()
        self._collection = self._client.get_collection(settings.loans_collection)
        self._users = self._client.get_collection(settings.users_collection)
        self._books = self._client.get_collection(settings.books_collection)
    
    def _to_entity(self, doc: dict) -> Loan:
        """Convert MongoDB document to Loan entity."""
        return Loan(
            id=doc[LoanFields.ID],
            user_id=doc.get(LoanFields.USER_ID, ""),
            book_id=doc.get(LoanFields.BOOK_ID, ""),
            borrowed_at=ensure_aware(doc.get(LoanFields.BORROWED_AT)),
            due_date=ensure_aware(doc.get(LoanFields.DUE_DATE)),
            returned_at=ensure_aware(doc.get(LoanFields.RETURNED_AT)),
            status=doc.get(LoanFields.STATUS, LOAN_STATUS_ACTIVE),
        )
    
    def _to_document(self, loan: Loan) -> dict:
        """Convert Loan entity to MongoDB document."""
        return {
            LoanFields.ID: loan.id,
            LoanFields.USER_ID: loan.user_id,
            LoanFields.BOOK_ID: loan.book_id,
            LoanFields.BORROWED_AT: to_utc(loan.borrowed_at),
            LoanFields.DUE_DATE: to_utc(loan.due_date),
            LoanFields.RETURNED_AT: to_utc(loan.returned_at),
            LoanFields.STATUS: loan.status,
        }
    
    def _with_details(self, loan: Loan) -> LoanWithDetails:
        user_doc = self._users.find_one({UserFields.ID: loan.user_id}, {UserFields.NAME: 1})
        book_doc = self._books.find_one({BookFields.ID: loan.book_id}, {BookFields.TITLE: 1})
        return LoanWithDetails(
            loan=loan,
            user_name=(user_doc or {}).get(UserFields.NAME, ""),
            book_title=(book_doc or {}).get(BookFields.TITLE, ""),
        )
    
    @staticmethod
    def _build_query(user_id: Optional[str], status: Optional[str]) -> dict:
        query: dict = {}
        if user_id:
            query[LoanFields.USER_ID] = user_id
        if status:
            query[LoanFields.STATUS] = status
        return query
    
    def create(self, loan: Loan) -> Loan:
        self._collection.insert_one(self._to_document(loan))
        return loan
    
    def find_by_id(self, loan_id: str) -> Optional[Loan]:
        doc = self._collection.find_one({LoanFields.ID: loan_id})
        if not doc:
            return None
        return self._to_entity(doc)
    
    def find_active_by_user_and_book(self, user_id: str, book_id: str) -> Optional[Loan]:
        doc = self._collection.find_one({
            LoanFields.USER_ID: user_id,
            LoanFields.BOOK_ID: book_id,
            LoanFields.STATUS: LOAN_STATUS_ACTIVE,
        })
        if not doc:
            return None
        return self._to_entity(doc)
    
    def list(
        self,
        page: int,
        limit: int,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Tuple[List[Loan], int]:
        query = self._build_query(user_id, status)
        total = self._collection.count_documents(query)
        docs = (
            self._collection.find(query)
            .sort(LoanFields.BORROWED_AT, DESCENDING)
            .skip(offset_for(page, limit))
            .limit(limit)
        )
        return [self._to_entity(doc) for doc in docs], total
    
    def update(self, loan: Loan) -> Loan:
        """Persist status and returned_at."""
        result = self._collection.find_one_and_update(
            {LoanFields.ID: loan.id},
            {
                "$set": {
                    LoanFields.STATUS: loan.status,
                    LoanFields.RETURNED_AT: to_utc(loan.returned_at),
                    LoanFields.DUE_DATE: to_utc(loan.due_date),
                }
            },
            return_document=ReturnDocument.AFTER,
        )
        
        if not result:
            raise ValueError(f"Loan '{loan.id}' not found")
        
        return self._to_entity(result)
    
    def mark_returned(self, loan_id: str, returned_at: datetime) -> Optional[Loan]:
        """Close the loan only if it is still active; None otherwise."""
        result = self._collection.find_one_and_update(
            {LoanFields.ID: loan_id, LoanFields.STATUS: LOAN_STATUS_ACTIVE},
            {
                "$set": {
                    LoanFields.STATUS: LOAN_STATUS_RETURNED,
                    LoanFields.RETURNED_AT: to_utc(returned_at),
                }
            },
            return_document=ReturnDocument.AFTER,
        )
        return self._to_entity(result) if result else None
    
    def reopen(self, loan_id: str) -> None:
        self._collection.update_one(
            {LoanFields.ID: loan_id, LoanFields.STATUS: LOAN_STATUS_RETURNED},
            {"$set": {LoanFields.STATUS: LOAN_STATUS_ACTIVE, LoanFields.RETURNED_AT: None}},
        )
    
    def find_by_id_with_details(self, loan_id: str) -> Optional[LoanWithDetails]:
        loan = self.find_by_id(loan_id)
        if loan is None:
            return None
        return self._with_details(loan)
    
    def list_with_details(
        self,
        page: int,
        limit: int,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Tuple[List[LoanWithDetails], int]:
        loans, total = self.list(page, limit, user_id=user_id, status=status)
        return [self._with_details(loan) for loan in loans], total
