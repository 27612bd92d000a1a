"""
Infrastructure Layer
====================

Storage adapters (SQLAlchemy, MongoDB) and security helpers
(password hashing, bearer tokens).
"""
