"""
BookHub
=======

Library lending service: users, books and loans over a FastAPI REST API,
backed by a relational (SQLAlchemy) or document (MongoDB) store.
"""

__version__ = "1.0.0"
