from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, List

from jobboard.core.config import settings
from jobboard.core.errors import ValidationError
from jobboard.core.security import hash_password

if TYPE_CHECKING:
    from jobboard.models.user import User

PASSWORD_MAX_LENGTH = 128

COMMON_WEAK_PASSWORDS = {
    "password",
    "12345678",
    "123456789",
    "qwertyui",
    "iloveyou",
    "password1",
    "sunshine",
    "princess",
    "football",
    "baseball",
    "welcome1",
    "trustno1",
    "passw0rd",
}

_VIOLATION_MESSAGES = {
    "required": "Please provide a password!",
    "min_length": "Password must be at least {min_length} characters long",
    "max_length": f"Password must be at most {PASSWORD_MAX_LENGTH} characters long",
    "denylist_common": "Password is too common",
}


def evaluate_password(password: str | None) -> List[str]:
    """
    Returns a list of violation codes if the password does not meet policy.
    """
    pw = password or ""
    if not pw:
        return ["required"]

    violations: list[str] = []
    min_length = max(int(getattr(settings, "PASSWORD_MIN_LENGTH", 8) or 0), 1)

    if len(pw) < min_length:
        violations.append("min_length")
    if len(pw) > PASSWORD_MAX_LENGTH:
        violations.append("max_length")
    if pw.lower() in COMMON_WEAK_PASSWORDS:
        violations.append("denylist_common")
    return violations


def ensure_valid_password(password: str | None, password_confirm: str | None) -> str:
    """
    Raises:
        ValidationError: policy violation or confirmation mismatch.
    """
    violations = evaluate_password(password)
    if violations:
        min_length = max(int(getattr(settings, "PASSWORD_MIN_LENGTH", 8) or 0), 1)
        raise ValidationError(_VIOLATION_MESSAGES[violations[0]].format(min_length=min_length))
    if password != password_confirm:
        raise ValidationError("Passwords are not the same!")
    return password  # type: ignore[return-value]


def _as_utc(value: datetime) -> datetime:
    # SQLite round-trips tz-aware datetimes as naive.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def mark_password_changed(user: "User") -> None:
    user.password_changed_at = datetime.now(timezone.utc)


def set_password(user: "User", password: str) -> None:
    user.password_hash = hash_password(password)
    mark_password_changed(user)


def password_changed_after(user: "User", issued_at: int) -> bool:
    """
    True when the user's password changed at or after the second in which a token
    with ``iat=issued_at`` was issued. Token ``iat`` has one-second resolution, so a
    token from the same second as the change counts as stale.
    """
    changed_at = getattr(user, "password_changed_at", None)
    if changed_at is None:
        return False
    return int(issued_at) <= int(_as_utc(changed_at).timestamp())


def fresh_token_issued_at(user: "User") -> datetime:
    """
    Issue time for a new session token that passes ``password_changed_after``:
    now, or the second after the last password change if that is later.
    """
    now = datetime.now(timezone.utc)
    changed_at = getattr(user, "password_changed_at", None)
    if changed_at is None:
        return now
    not_before = datetime.fromtimestamp(int(_as_utc(changed_at).timestamp()), tz=timezone.utc) + timedelta(seconds=1)
    return max(now, not_before)
