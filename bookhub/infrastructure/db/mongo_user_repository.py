"""
MongoDB User Repository
=======================

Concrete implementation of UserRepository using MongoDB.
"""
from typing import List, Optional, Tuple

from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from bookhub.core.config import get_settings
from bookhub.domain.constants.user_fields import UserFields
from bookhub.domain.exceptions import EmailAlreadyExistsError
from bookhub.domain.models.user import User
from bookhub.domain.repositories.user_repository import UserRepository
from bookhub.infrastructure.db.mongo_connection import MongoClientManager, get_mongo_client
from bookhub.utils.datetime_utils import ensure_aware, to_utc
from bookhub.utils.pagination import offset_for


def _is_email_violation(error: DuplicateKeyError) -> bool:
    key_pattern = (error.details or {}).get("keyPattern") or {}
    return UserFields.EMAIL in key_pattern or UserFields.EMAIL in str(error)


class MongoUserRepository(UserRepository):
    """
    MongoDB implementation of UserRepository.
    
    Handles all user persistence operations using MongoDB.
    """
    
    def __init__(self, client: Optional[MongoClientManager] = None):
        """Initialize repository with MongoDB client."""
        self._client = client or get_mongo_client()
        self._collection = self._client.get_collection(get_settings().users_collection)
    
    def _to_entity(self, doc: dict) -> User:
        """Convert MongoDB document to User entity."""
        return User(
            id=doc[UserFields.ID],
            name=doc.get(UserFields.NAME, ""),
            email=doc.get(UserFields.EMAIL, ""),
            password_hash=doc.get(UserFields.PASSWORD_HASH, ""),
            active=doc.get(UserFields.ACTIVE, True),
            created_at=ensure_aware(doc.get(UserFields.CREATED_AT)),
            updated_at=ensure_aware(doc.get(UserFields.UPDATED_AT)),
        )
    
    def _to_document(self, user: User) -> dict:
        """Convert User entity to MongoDB document."""
        return {
            UserFields.ID: user.id,
            UserFields.NAME: user.name,
            UserFields.EMAIL: user.email,
            UserFields.PASSWORD_HASH: user.password_hash,
            UserFields.ACTIVE: user.active,
            UserFields.CREATED_AT: to_utc(user.created_at),
            UserFields.UPDATED_AT: to_utc(user.updated_at),
        }
    
    def create(self, user: User) -> User:
        """Create a new user."""
        try:
            self._collection.insert_one(self._to_document(user))
        except DuplicateKeyError as e:
            if _is_email_violation(e):
                raise EmailAlreadyExistsError()
            raise
        return user
    
    def find_by_id(self, user_id: str) -> Optional[User]:
        doc = self._collection.find_one({UserFields.ID: user_id})
        if not doc:
            return None
        return self._to_entity(doc)
    
    def find_by_email(self, email: str) -> Optional[User]:
        doc = self._collection.find_one({UserFields.EMAIL: email})
        if not doc:
            return None
        return self._to_entity(doc)
    
    def list(self, page: int, limit: int) -> Tuple[List[User], int]:
        """List users, newest first."""
        total = self._collection.count_documents({})
        docs = (
            self._collection.find({})
            .sort(UserFields.CREATED_AT, DESCENDING)
            .skip(offset_for(page, limit))
            .limit(limit)
        )
        return [self._to_entity(doc) for doc in docs], total
    
    def update(self, user: User) -> User:
        """Update an existing user."""
        doc = self._to_document(user)
        try:
            result = self._collection.find_one_and_update(
                {UserFields.ID: user.id},
                {"$set": {k: v for k, v in doc.items() if k != UserFields.CREATED_AT}},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            if _is_email_violation(e):
                raise EmailAlreadyExistsError()
            raise
        
        if not result:
            raise ValueError(f"User '{user.id}' not found")
        
        return self._to_entity(result)
    
    def delete(self, user_id: str) -> bool:
        result = self._collection.delete_one({UserFields.ID: user_id})
        return result.deleted_count > 0
