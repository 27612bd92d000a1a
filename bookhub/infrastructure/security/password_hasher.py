"""
Password Hasher
===============

Slow, salted password hashing with passlib's pbkdf2_sha256.
The round count is the cost factor and comes from settings.
"""
import logging

from passlib.hash import pbkdf2_sha256

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Hash and verify passwords; verification is constant-time in passlib."""
    
    def __init__(self, rounds: int = 29000):
        self._context = pbkdf2_sha256.using(rounds=rounds)
    
    def hash(self, password: str) -> str:
        return self._context.hash(password)
    
    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check a plaintext password against a stored hash.
        
        A stored value that is not a pbkdf2_sha256 hash never verifies.
        """
        try:
            return self._context.verify(password, password_hash)
        except ValueError:
            logger.warning("Stored password hash is malformed or uses an unknown scheme")
            return False
