# jobboard/core/security.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from hashlib import sha256

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from jobboard.core.config import settings
from jobboard.core.errors import InvalidTokenError

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

ACCESS_PURPOSE = "access"


# -------------------------
# Password hashing
# -------------------------
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password or not password_hash:
        return False
    return pwd_context.verify(password, password_hash)


# -------------------------
# JWT helpers
# -------------------------
@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    issued_at: int  # epoch seconds


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _require_jwt_secret() -> None:
    if not settings.JWT_SECRET or not settings.JWT_SECRET.strip():
        raise RuntimeError("JWT_SECRET must be set (auth is required).")


def create_access_token(user_id: int, *, issued_at: datetime | None = None) -> str:
    """
    Session token used for API auth: Authorization: Bearer <token>
    """
    _require_jwt_secret()

    now = issued_at or _now_utc()
    exp = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload = {
        "sub": str(user_id),
        "purpose": ACCESS_PURPOSE,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }

    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_access_token(token: str) -> TokenClaims:
    """
    Raises:
        InvalidTokenError: bad signature, expired, wrong purpose or malformed claims.
    """
    _require_jwt_secret()
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise InvalidTokenError("Your token has expired! Please log in again.")
    except JWTError:
        raise InvalidTokenError("Invalid token. Please log in again!")

    if payload.get("purpose") != ACCESS_PURPOSE:
        raise InvalidTokenError("Invalid token. Please log in again!")

    try:
        user_id = int(payload.get("sub"))
        issued_at = int(payload.get("iat"))
    except (TypeError, ValueError):
        raise InvalidTokenError("Invalid token. Please log in again!")

    return TokenClaims(user_id=user_id, issued_at=issued_at)


# -------------------------
# Reset token hashing
# -------------------------
def hash_reset_token(raw_token: str) -> str:
    """
    One-way digest of a password reset token. Only this value is stored.
    """
    return sha256(raw_token.encode("utf-8")).hexdigest()
