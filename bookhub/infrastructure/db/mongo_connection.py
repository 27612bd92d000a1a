"""
MongoDB Client
==============

MongoDB client manager for the document-store backend.
"""
import logging
from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from bookhub.core.config import get_settings
from bookhub.domain.constants.book_fields import BookFields
from bookhub.domain.constants.loan_fields import LoanFields
from bookhub.domain.constants.user_fields import UserFields

logger = logging.getLogger(__name__)


class MongoClientManager:
    """
    MongoDB client manager.
    
    Owns one MongoClient (which pools connections internally) and
    provides access to collections. The application uses a single
    instance through get_mongo_client().
    """
    
    def __init__(
        self,
        uri: Optional[str] = None,
        database_name: Optional[str] = None,
        max_pool_size: Optional[int] = None,
        min_pool_size: Optional[int] = None,
    ):
        settings = get_settings()
        self._uri = uri or settings.mongo_uri
        self._database_name = database_name or settings.mongo_database_name
        self._max_pool_size = max_pool_size or settings.mongo_max_pool_size
        self._min_pool_size = min_pool_size or settings.mongo_min_pool_size
        self._client: Optional[MongoClient] = None
        self._database: Optional[Database] = None
    
    def _initialize_client(self) -> None:
        """Initialize MongoDB client connection."""
        if self._client is not None:
            return
        
        # tz_aware: datetimes come back as aware UTC values
        self._client = MongoClient(
            self._uri,
            maxPoolSize=self._max_pool_size,
            minPoolSize=self._min_pool_size,
            tz_aware=True,
        )
        self._database = self._client[self._database_name]
        logger.info(f"Connected to MongoDB: {self._database_name}")
    
    def get_database(self) -> Database:
        """Get MongoDB database instance."""
        if self._database is None:
            self._initialize_client()
        return self._database
    
    def get_collection(self, collection_name: str) -> Collection:
        """
        Get a MongoDB collection.
        
        Args:
            collection_name: Name of the collection
            
        Returns:
            MongoDB Collection object
        """
        return self.get_database()[collection_name]
    
    def ensure_indexes(self) -> None:
        """
        Create the indexes the repositories rely on.
        
        The unique indexes on email and isbn are what finally reject a
        duplicate when two creates race past the lookup.
        """
        settings = get_settings()
        users = self.get_collection(settings.users_collection)
        books = self.get_collection(settings.books_collection)
        loans = self.get_collection(settings.loans_collection)
        
        users.create_index([(UserFields.ID, ASCENDING)], unique=True)
        users.create_index([(UserFields.EMAIL, ASCENDING)], unique=True)
        users.create_index([(UserFields.CREATED_AT, ASCENDING)])
        books.create_index([(BookFields.ID, ASCENDING)], unique=True)
        books.create_index([(BookFields.ISBN, ASCENDING)], unique=True)
        books.create_index([(BookFields.CREATED_AT, ASCENDING)])
        loans.create_index([(LoanFields.ID, ASCENDING)], unique=True)
        loans.create_index([
            (LoanFields.USER_ID, ASCENDING),
            (LoanFields.BOOK_ID, ASCENDING),
            (LoanFields.STATUS, ASCENDING),
        ])
        loans.create_index([(LoanFields.BORROWED_AT, ASCENDING)])
        logger.info("MongoDB indexes ensured")
    
    def close(self) -> None:
        """Close MongoDB connection."""
        if self._client:
            self._client.close()
            self._client = None
            self._database = None


_mongo_client: Optional[MongoClientManager] = None


def get_mongo_client() -> MongoClientManager:
    """Get singleton MongoDB client manager."""
    global _mongo_client
    if _mongo_client is None:
        _mongo_client = MongoClientManager()
    return _mongo_client


def close_mongo_client() -> None:
    """Close and forget the singleton client."""
    global _mongo_client
    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None
