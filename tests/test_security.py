from __future__ import annotations

import pytest

from app.models.errors import AuthenticationError
from app.utils.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_roundtrip() -> None:
    hashed = hash_password("secret123")

    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret123", "not-a-bcrypt-hash")


def test_token_carries_identity() -> None:
    token = create_access_token("user-1", "jane@example.com", "admin", secret="s3cret")
    payload = decode_access_token(token, "s3cret")

    assert payload["sub"] == "user-1"
    assert payload["email"] == "jane@example.com"
    assert payload["role"] == "admin"


def test_expired_token_is_rejected() -> None:
    token = create_access_token("user-1", "jane@example.com", "user", secret="s3cret", expires_minutes=-1)
    with pytest.raises(AuthenticationError) as exc_info:
        decode_access_token(token, "s3cret")
    assert exc_info.value.message == "Token has expired"


def test_token_signed_with_other_secret_is_rejected() -> None:
    token = create_access_token("user-1", "jane@example.com", "user", secret="other")
    with pytest.raises(AuthenticationError):
        decode_access_token(token, "s3cret")
