"""
API v1 Routers
==============
"""
from .auth_controller import router as auth_router
from .book_controller import router as book_router
from .loan_controller import router as loan_router
from .user_controller import router as user_router

__all__ = ["auth_router", "book_router", "loan_router", "user_router"]
