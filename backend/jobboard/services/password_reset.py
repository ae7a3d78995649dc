from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone

from jobboard.core.config import settings
from jobboard.core.security import hash_reset_token
from jobboard.models.user import User


def reset_token_expiry(now: datetime | None = None) -> datetime:
    minutes = int(getattr(settings, "PASSWORD_RESET_EXPIRE_MINUTES", 10))
    return (now or datetime.now(timezone.utc)) + timedelta(minutes=minutes)


def generate_reset_token(user: User) -> str:
    """
    Sets a fresh reset hash + expiry on the user record and returns the raw token.
    The raw token is ONLY returned here; the caller must not persist it.
    """
    raw = secrets.token_hex(32)
    user.password_reset_token_hash = hash_reset_token(raw)
    user.password_reset_expires_at = reset_token_expiry()
    return raw


def clear_reset_token(user: User) -> None:
    user.password_reset_token_hash = None
    user.password_reset_expires_at = None
