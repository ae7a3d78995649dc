# jobboard/services/auth.py
"""
Authentication flows: signup, login, the protect gate, forgot/reset password and
password change.

Every operation is stateless between requests. All state lives on the user
record; session tokens are verified by signature, expiry and the freshness check
against ``password_changed_at``.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from jobboard.core.config import settings
from jobboard.core.errors import (
    AuthenticationError,
    BadRequestError,
    InvalidOrExpiredTokenError,
    ServerError,
    ValidationError,
)
from jobboard.core.password_policy import (
    ensure_valid_password,
    fresh_token_issued_at,
    password_changed_after,
    set_password,
)
from jobboard.core.security import (
    create_access_token,
    hash_password,
    hash_reset_token,
    verify_access_token,
    verify_password,
)
from jobboard.models.user import User
from jobboard.services.email import PASSWORD_RESET_SUBJECT, EmailSender, password_reset_body, send_email
from jobboard.services.password_reset import clear_reset_token, generate_reset_token
from jobboard.services.users import UserStore

logger = logging.getLogger(__name__)

WRONG_CREDENTIALS = "Email or password is wrong!"


def reset_password_url(base_url: str, raw_token: str) -> str:
    return f"{base_url.rstrip('/')}/auth/reset-password/{raw_token}"


class AuthService:
    def __init__(self, store: UserStore, *, sender: EmailSender | None = None) -> None:
        self.store = store
        self.send_email = sender or send_email

    @staticmethod
    def _issue_token(user: User) -> str:
        # iat lands strictly after the last password change.
        return create_access_token(user.id, issued_at=fresh_token_issued_at(user))

    def signup(
        self,
        *,
        email: str,
        password: str | None,
        password_confirm: str | None,
        first_name: str,
        last_name: str,
        about: str | None = None,
    ) -> tuple[User, str]:
        """
        Raises:
            ValidationError: password policy/confirmation, malformed fields, duplicate email.
        """
        ensure_valid_password(password, password_confirm)
        if self.store.get_by_email(email):
            raise ValidationError("Email already registered")

        user = self.store.create(
            email=email,
            first_name=first_name,
            last_name=last_name,
            about=about,
            password_hash=hash_password(password),  # type: ignore[arg-type]
        )
        return user, create_access_token(user.id)

    def login(self, email: str | None, password: str | None) -> tuple[User, str]:
        """
        Unknown email and wrong password fail identically.

        Raises:
            BadRequestError: email or password missing.
            AuthenticationError: credentials do not match.
        """
        if not email or not password:
            raise BadRequestError("Please provide your email and password!")

        user = self.store.get_by_email(email, with_password=True)
        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationError(WRONG_CREDENTIALS)

        return user, self._issue_token(user)

    def protect(self, token: str | None) -> User:
        """
        Resolve the user behind a bearer token.

        Raises:
            AuthenticationError: no token, user gone, or password changed since issue.
            InvalidTokenError: token signature/expiry/shape invalid.
        """
        if not token:
            raise AuthenticationError("You are not logged in.")

        claims = verify_access_token(token)

        user = self.store.get_by_id(claims.user_id)
        if not user:
            raise AuthenticationError("The user no longer exists.")

        if password_changed_after(user, claims.issued_at):
            raise AuthenticationError("Password has been changed. Please log in again.")

        return user

    def forgot_password(self, email: str | None, base_url: str) -> None:
        """
        Issue a reset token and email its link. Only the hash is kept on the record.

        Raises:
            BadRequestError: no account for the email. Nothing is written.
            ServerError: the email could not be sent. Reset fields are cleared first.
        """
        user = self.store.get_by_email(email) if email else None
        if not user:
            raise BadRequestError("There is no account with this email!")

        raw_token = generate_reset_token(user)
        self.store.save(user, validate=False)

        url = reset_password_url(base_url, raw_token)
        body = password_reset_body(url, valid_minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES)
        try:
            self.send_email(user.email, PASSWORD_RESET_SUBJECT, body)
        except Exception as e:  # noqa: BLE001
            logger.exception("Password reset email failed for user id=%s", user.id)
            clear_reset_token(user)
            self.store.save(user, validate=False)
            raise ServerError("There was an error sending the email. Please try again!") from e

        logger.info("Password reset email sent for user id=%s", user.id)

    def reset_password(
        self,
        raw_token: str,
        password: str | None,
        password_confirm: str | None,
    ) -> tuple[User, str]:
        """
        Raises:
            InvalidOrExpiredTokenError: no user holds this token, or it expired.
            ValidationError: new password rejected.
        """
        now = datetime.now(timezone.utc)
        # Lookup and clear are separate statements; concurrent resets with the same
        # token are not serialized here.
        user = self.store.get_by_reset_token(hash_reset_token(raw_token or ""), now)
        if not user:
            raise InvalidOrExpiredTokenError("Your token is invalid or expired. Please try again!")

        ensure_valid_password(password, password_confirm)
        set_password(user, password)  # type: ignore[arg-type]
        clear_reset_token(user)
        self.store.save(user)

        logger.info("Password reset completed for user id=%s", user.id)
        return user, self._issue_token(user)

    def update_password(
        self,
        user_id: int,
        old_password: str | None,
        new_password: str | None,
        password_confirm: str | None,
    ) -> tuple[User, str]:
        """
        Change the password of a logged-in user and return a fresh token, since the
        change invalidates every token issued before it.

        Raises:
            AuthenticationError: old password wrong (or the user vanished).
            ValidationError: new password rejected.
        """
        user = self.store.get_by_id(user_id, with_password=True)
        if not user:
            raise AuthenticationError("The user no longer exists.")

        if not verify_password(old_password or "", user.password_hash):
            raise AuthenticationError("Your password is not correct")

        ensure_valid_password(new_password, password_confirm)
        set_password(user, new_password)  # type: ignore[arg-type]
        self.store.save(user)

        logger.info("Password updated for user id=%s", user.id)
        return user, self._issue_token(user)
