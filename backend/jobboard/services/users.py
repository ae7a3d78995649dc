# jobboard/services/users.py
"""
Credential store.

Responsibilities:
- User lookup by id, email or reset-token hash
- Creating and saving user records, with record-level validation
- Translating integrity errors (duplicate email) into ValidationError

One store is built per request around that request's session and handed to the
services explicitly; nothing here holds a global session.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, undefer

from jobboard.core.errors import ValidationError
from jobboard.models.user import User

logger = logging.getLogger(__name__)


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


class UserStore:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_id(self, user_id: int, *, with_password: bool = False) -> Optional[User]:
        qry = self.db.query(User).filter(User.id == user_id)
        if with_password:
            qry = qry.options(undefer(User.password_hash))
        return qry.first()

    def get_by_email(self, email: str, *, with_password: bool = False) -> Optional[User]:
        """Look up a user by email address. The password hash is only loaded on request."""
        qry = self.db.query(User).filter(User.email == normalize_email(email))
        if with_password:
            qry = qry.options(undefer(User.password_hash))
        return qry.first()

    def get_by_reset_token(self, token_hash: str, now: datetime) -> Optional[User]:
        """Match on the stored hash AND an expiry still in the future."""
        return (
            self.db.query(User)
            .filter(User.password_reset_token_hash == token_hash)
            .filter(User.password_reset_expires_at > now)
            .first()
        )

    def create(
        self,
        *,
        email: str,
        first_name: str,
        last_name: str,
        password_hash: str,
        about: str | None = None,
    ) -> User:
        """
        Raises:
            ValidationError: malformed fields or email already registered.
        """
        user = User(
            email=normalize_email(email),
            first_name=(first_name or "").strip(),
            last_name=(last_name or "").strip(),
            about=about,
            password_hash=password_hash,
        )
        self.save(user)
        logger.info("Created user id=%s email=%s", user.id, user.email)
        return user

    def save(self, user: User, *, validate: bool = True) -> User:
        """
        Persist the record. ``validate=False`` skips record checks for narrow
        updates such as setting or clearing reset-token fields.

        Raises:
            ValidationError: record checks failed or the email is taken.
        """
        if validate:
            self._validate(user)

        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValidationError("Email already registered")
        self.db.refresh(user)
        return user

    @staticmethod
    def _validate(user: User) -> None:
        try:
            validate_email(user.email or "", check_deliverability=False)
        except EmailNotValidError:
            raise ValidationError("Please provide a valid email")
        if not user.first_name:
            raise ValidationError("Please tell us your first name!")
        if not user.last_name:
            raise ValidationError("Please tell us your last name!")
        if not user.password_hash:
            raise ValidationError("Please provide a password!")
        if (user.password_reset_token_hash is None) != (user.password_reset_expires_at is None):
            raise ValidationError("Password reset state is inconsistent")
