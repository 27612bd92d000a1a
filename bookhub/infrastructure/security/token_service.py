"""
Token Service
=============

HS256 JSON Web Tokens for API authentication.

Claims: sub (user id), email, iat, exp, iss.
"""
import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Tuple

from bookhub.domain.exceptions import DomainError

_HEADER = {"alg": "HS256", "typ": "JWT"}


class InvalidTokenError(DomainError):
    code = "UNAUTHORIZED"
    message = "invalid token"


class ExpiredTokenError(InvalidTokenError):
    message = "token has expired"


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    email: str
    issued_at: datetime
    expires_at: datetime
    issuer: str


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


class TokenService:
    """Issue and validate signed bearer tokens."""
    
    def __init__(self, secret_key: str, token_duration: timedelta, issuer: str):
        if not secret_key:
            raise ValueError("Token secret key cannot be empty")
        self._secret = secret_key.encode("utf-8")
        self._duration = token_duration
        self._issuer = issuer
    
    def _sign(self, message: bytes) -> str:
        return _b64url_encode(hmac.new(self._secret, message, hashlib.sha256).digest())
    
    def generate_token(self, user_id: str, email: str) -> Tuple[str, datetime]:
        """
        Issue a token for a user.
        
        Returns:
            (token string, expiry as aware UTC datetime)
        """
        issued = int(time.time())
        expires = issued + int(self._duration.total_seconds())
        payload: Dict[str, Any] = {
            "sub": user_id,
            "email": email,
            "iat": issued,
            "exp": expires,
            "iss": self._issuer,
        }
        header_b64 = _b64url_encode(json.dumps(_HEADER, separators=(",", ":")).encode("utf-8"))
        payload_b64 = _b64url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
        signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
        token = f"{header_b64}.{payload_b64}.{self._sign(signing_input)}"
        return token, datetime.fromtimestamp(expires, tz=timezone.utc)
    
    def validate_token(self, token: str) -> TokenClaims:
        """
        Verify signature, algorithm, issuer and expiry.
        
        Raises:
            ExpiredTokenError: Signature is fine but exp is in the past
            InvalidTokenError: Anything else wrong with the token
        """
        try:
            header_b64, payload_b64, signature = token.split(".")
        except ValueError:
            raise InvalidTokenError("malformed token")
        
        try:
            header = json.loads(_b64url_decode(header_b64))
        except (ValueError, UnicodeDecodeError):
            raise InvalidTokenError("malformed token header")
        if not isinstance(header, dict) or header.get("alg") != "HS256":
            raise InvalidTokenError("unexpected signing method")
        
        try:
            expected = self._sign(f"{header_b64}.{payload_b64}".encode("ascii"))
        except UnicodeEncodeError:
            raise InvalidTokenError("malformed token")
        if not hmac.compare_digest(signature.encode("utf-8"), expected.encode("ascii")):
            raise InvalidTokenError("invalid token signature")
        
        try:
            payload = json.loads(_b64url_decode(payload_b64))
        except (ValueError, UnicodeDecodeError):
            raise InvalidTokenError("malformed token payload")
        if not isinstance(payload, dict):
            raise InvalidTokenError("malformed token payload")
        
        if payload.get("iss") != self._issuer:
            raise InvalidTokenError("unexpected token issuer")
        
        exp = payload.get("exp")
        iat = payload.get("iat")
        if not isinstance(exp, int) or not isinstance(iat, int):
            raise InvalidTokenError("token is missing exp/iat")
        if time.time() >= exp:
            raise ExpiredTokenError()
        
        user_id = payload.get("sub")
        if not user_id:
            raise InvalidTokenError("token has no subject")
        
        return TokenClaims(
            user_id=str(user_id),
            email=str(payload.get("email", "")),
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
            issuer=self._issuer,
        )
