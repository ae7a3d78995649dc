from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from jobboard.core import config as app_config
from jobboard.core.errors import AuthenticationError, InvalidTokenError
from jobboard.core.security import (
    create_access_token,
    hash_password,
    hash_reset_token,
    verify_access_token,
    verify_password,
)


def test_hash_and_verify_password():
    h = hash_password("a_long_enough_password")
    assert h != "a_long_enough_password"
    assert verify_password("a_long_enough_password", h) is True
    assert verify_password("wrong_password", h) is False
    assert verify_password("", h) is False
    assert verify_password("a_long_enough_password", None) is False


def test_access_token_round_trip_claims():
    issued = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    app_config.settings.ACCESS_TOKEN_EXPIRE_MINUTES = 10 * 365 * 24 * 60
    token = create_access_token(42, issued_at=issued)

    claims = verify_access_token(token)
    assert claims.user_id == 42
    assert claims.issued_at == int(issued.timestamp())


def test_expired_token():
    issued = datetime.now(timezone.utc) - timedelta(days=2)
    app_config.settings.ACCESS_TOKEN_EXPIRE_MINUTES = 60
    token = create_access_token(1, issued_at=issued)
    with pytest.raises(InvalidTokenError) as exc:
        verify_access_token(token)
    assert exc.value.message == "Your token has expired! Please log in again."
    assert exc.value.status_code == 401
    assert isinstance(exc.value, AuthenticationError)


def test_tampered_token_is_invalid():
    token = create_access_token(1)
    head, payload, sig = token.split(".")
    tampered = ".".join([head, payload, sig[::-1]])
    with pytest.raises(InvalidTokenError) as exc:
        verify_access_token(tampered)
    assert exc.value.message == "Invalid token. Please log in again!"


def test_token_signed_with_other_secret_is_invalid():
    now = datetime.now(timezone.utc)
    forged = jwt.encode(
        {"sub": "1", "purpose": "access", "iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp())},
        "some_other_secret",
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenError):
        verify_access_token(forged)


def test_wrong_purpose_is_invalid():
    now = datetime.now(timezone.utc)
    other = jwt.encode(
        {"sub": "1", "purpose": "email_verify", "iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp())},
        app_config.settings.JWT_SECRET,
        algorithm=app_config.settings.JWT_ALGORITHM,
    )
    with pytest.raises(InvalidTokenError):
        verify_access_token(other)


def test_hash_reset_token_is_stable_sha256():
    digest = hash_reset_token("abc")
    assert digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert hash_reset_token("abc") == digest
    assert hash_reset_token("abd") != digest
