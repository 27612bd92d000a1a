"""
User Repository Interface
=========================

Abstract interface for user data access.
Implementations should be in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from bookhub.domain.models.user import User


class UserRepository(ABC):
    """
    Abstract repository for user persistence operations.
    
    This interface defines the contract for user data access.
    Concrete implementations should be in the infrastructure layer.
    """
    
    @abstractmethod
    def create(self, user: User) -> User:
        """
        Persist a new user.
        
        Args:
            user: User entity to create
            
        Returns:
            Created user entity
            
        Raises:
            EmailAlreadyExistsError: If the store already holds the email
        """
        pass
    
    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[User]:
        """
        Find a user by its ID.
        
        Args:
            user_id: Unique user identifier
            
        Returns:
            User entity if found, None otherwise
        """
        pass
    
    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        """
        Find a user by email address.
        
        Args:
            email: Email address (exact match)
            
        Returns:
            User entity if found, None otherwise
        """
        pass
    
    @abstractmethod
    def list(self, page: int, limit: int) -> Tuple[List[User], int]:
        """
        List one page of users, newest first.
        
        Args:
            page: 1-based page number
            limit: Page size
            
        Returns:
            (users on the page, total number of users)
        """
        pass
    
    @abstractmethod
    def update(self, user: User) -> User:
        """
        Update an existing user.
        
        Args:
            user: User entity with updated data
            
        Returns:
            Updated user entity
        """
        pass
    
    @abstractmethod
    def delete(self, user_id: str) -> bool:
        """
        Delete a user.
        
        Args:
            user_id: Unique user identifier
            
        Returns:
            True if user was found and deleted, False otherwise
        """
        pass
