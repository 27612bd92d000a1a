"""
MongoDB Book Repository
=======================

Concrete implementation of BookRepository using MongoDB.
"""
from typing import List, Optional, Tuple

from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from bookhub.core.config import get_settings
from bookhub.domain.constants.book_fields import BookFields
from bookhub.domain.exceptions import BookISBNAlreadyExistsError
from bookhub.domain.models.book import Book
from bookhub.domain.repositories.book_repository import BookRepository
from bookhub.infrastructure.db.mongo_connection import MongoClientManager, get_mongo_client
from bookhub.utils.datetime_utils import ensure_aware, now, to_utc
from bookhub.utils.pagination import offset_for


def _is_isbn_violation(error: DuplicateKeyError) -> bool:
    key_pattern = (error.details or {}).get("keyPattern") or {}
    return BookFields.ISBN in key_pattern or BookFields.ISBN in str(error)


class MongoBookRepository(BookRepository):
    """
    MongoDB implementation of BookRepository.
    
    Copy counters are only ever changed through adjust_available_copies,
    a single guarded find_one_and_update.
    """
    
    def __init__(self, client: Optional[MongoClientManager] = None):
        """Initialize repository with MongoDB client."""
        self._client = client or get_mongo_client()
        self._collection = self._client.get_collection(get_settings().books_collection)
    
    def _to_entity(self, doc: dict) -> Book:
        """Convert MongoDB document to Book entity."""
        return Book(
            id=doc[BookFields.ID],
            title=doc.get(BookFields.TITLE, ""),
            author=doc.get(BookFields.AUTHOR, ""),
            isbn=doc.get(BookFields.ISBN, ""),
            published_year=doc.get(BookFields.PUBLISHED_YEAR, 0),
            total_copies=doc.get(BookFields.TOTAL_COPIES, 0),
            available_copies=doc.get(BookFields.AVAILABLE_COPIES, 0),
            created_at=ensure_aware(doc.get(BookFields.CREATED_AT)),
            updated_at=ensure_aware(doc.get(BookFields.UPDATED_AT)),
        )
    
    def _to_document(self, book: Book) -> dict:
        """Convert Book entity to MongoDB document."""
        return {
            BookFields.ID: book.id,
            BookFields.TITLE: book.title,
            BookFields.AUTHOR: book.author,
            BookFields.ISBN: book.isbn,
            BookFields.PUBLISHED_YEAR: book.published_year,
            BookFields.TOTAL_COPIES: book.total_copies,
            BookFields.AVAILABLE_COPIES: book.available_copies,
            BookFields.CREATED_AT: to_utc(book.created_at),
            BookFields.UPDATED_AT: to_utc(book.updated_at),
        }
    
    def create(self, book: Book) -> Book:
        """Create a new book."""
        try:
            self._collection.insert_one(self._to_document(book))
        except DuplicateKeyError as e:
            if _is_isbn_violation(e):
                raise BookISBNAlreadyExistsError()
            raise
        return book
    
    def find_by_id(self, book_id: str) -> Optional[Book]:
        doc = self._collection.find_one({BookFields.ID: book_id})
        if not doc:
            return None
        return self._to_entity(doc)
    
    def find_by_isbn(self, isbn: str) -> Optional[Book]:
        doc = self._collection.find_one({BookFields.ISBN: isbn})
        if not doc:
            return None
        return self._to_entity(doc)
    
    def list(
        self,
        page: int,
        limit: int,
        available_only: Optional[bool] = None,
    ) -> Tuple[List[Book], int]:
        """List books, newest first, optionally filtered by availability."""
        query: dict = {}
        if available_only is True:
            query[BookFields.AVAILABLE_COPIES] = {"$gt": 0}
        elif available_only is False:
            query[BookFields.AVAILABLE_COPIES] = {"$lte": 0}
        
        total = self._collection.count_documents(query)
        docs = (
            self._collection.find(query)
            .sort(BookFields.CREATED_AT, DESCENDING)
            .skip(offset_for(page, limit))
            .limit(limit)
        )
        return [self._to_entity(doc) for doc in docs], total
    
    def update(self, book: Book) -> Book:
        """Update an existing book."""
        doc = self._to_document(book)
        try:
            result = self._collection.find_one_and_update(
                {BookFields.ID: book.id},
                {"$set": {k: v for k, v in doc.items() if k != BookFields.CREATED_AT}},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            if _is_isbn_violation(e):
                raise BookISBNAlreadyExistsError()
            raise
        
        if not result:
            raise ValueError(f"Book '{book.id}' not found")
        
        return self._to_entity(result)
    
    def adjust_available_copies(self, book_id: str, delta: int) -> Optional[Book]:
        """Apply delta only if 0 <= available_copies + delta <= total_copies."""
        new_value = {"$add": [f"${BookFields.AVAILABLE_COPIES}", delta]}
        result = self._collection.find_one_and_update(
            {
                BookFields.ID: book_id,
                "$expr": {
                    "$and": [
                        {"$gte": [new_value, 0]},
                        {"$lte": [new_value, f"${BookFields.TOTAL_COPIES}"]},
                    ]
                },
            },
            {
                "$inc": {BookFields.AVAILABLE_COPIES: delta},
                "$set": {BookFields.UPDATED_AT: to_utc(now())},
            },
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            return None
        return self._to_entity(result)
    
    def delete(self, book_id: str) -> bool:
        result = self._collection.delete_one({BookFields.ID: book_id})
        return result.deleted_count > 0
