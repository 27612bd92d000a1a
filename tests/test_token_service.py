import base64
import json
from datetime import timedelta

import pytest

from bookhub.infrastructure.security.token_service import (
    ExpiredTokenError,
    InvalidTokenError,
    TokenService,
)


@pytest.fixture
def tokens():
    return TokenService("secret", timedelta(hours=1), "bookhub")


def _b64(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def test_round_trip_claims(tokens):
    token, expires_at = tokens.generate_token("user-1", "ada@example.com")
    claims = tokens.validate_token(token)
    assert claims.user_id == "user-1"
    assert claims.email == "ada@example.com"
    assert claims.issuer == "bookhub"
    assert claims.expires_at == expires_at
    assert claims.expires_at - claims.issued_at == timedelta(hours=1)


def test_expired_token():
    service = TokenService("secret", timedelta(seconds=-5), "bookhub")
    token, _ = service.generate_token("user-1", "ada@example.com")
    with pytest.raises(ExpiredTokenError):
        service.validate_token(token)


def test_wrong_secret(tokens):
    token, _ = TokenService("other", timedelta(hours=1), "bookhub").generate_token("u", "e@x.io")
    with pytest.raises(InvalidTokenError):
        tokens.validate_token(token)


def test_wrong_issuer(tokens):
    token, _ = TokenService("secret", timedelta(hours=1), "someone-else").generate_token("u", "e@x.io")
    with pytest.raises(InvalidTokenError):
        tokens.validate_token(token)


def test_tampered_payload(tokens):
    token, _ = tokens.generate_token("user-1", "ada@example.com")
    header, _, signature = token.split(".")
    forged = _b64({"sub": "admin", "email": "x@x.io", "iat": 0, "exp": 2**40, "iss": "bookhub"})
    with pytest.raises(InvalidTokenError):
        tokens.validate_token(f"{header}.{forged}.{signature}")


def test_alg_none_rejected(tokens):
    token, _ = tokens.generate_token("user-1", "ada@example.com")
    _, payload, _ = token.split(".")
    header = _b64({"alg": "none", "typ": "JWT"})
    with pytest.raises(InvalidTokenError):
        tokens.validate_token(f"{header}.{payload}.")


@pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d", "!!!.@@@.###", "é.é.é"])
def test_malformed_tokens(tokens, token):
    with pytest.raises(InvalidTokenError):
        tokens.validate_token(token)


def test_empty_secret_refused():
    with pytest.raises(ValueError):
        TokenService("", timedelta(hours=1), "bookhub")
