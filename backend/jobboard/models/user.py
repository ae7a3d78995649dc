# jobboard/models/user.py
from sqlalchemy import Column, DateTime, Integer, String, Text, func
from sqlalchemy.orm import deferred, relationship

from jobboard.core.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    email = Column(String(255), unique=True, index=True, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    about = Column(Text, nullable=True)

    # Never serialized; see schemas.user.UserOut.
    password_hash = deferred(Column(String(255), nullable=False))
    # Null until the first change/reset. Tokens issued before this are rejected.
    password_changed_at = Column(DateTime(timezone=True), nullable=True)

    # Store ONLY a hash of the reset token. Both columns are set or both null.
    password_reset_token_hash = Column(String(64), nullable=True, index=True)
    password_reset_expires_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    jobs = relationship(
        "Job",
        back_populates="posted_by",
        cascade="all, delete-orphan",
    )

    applications = relationship(
        "Application",
        back_populates="applicant",
        cascade="all, delete-orphan",
    )
