import os
from datetime import datetime, timedelta, timezone

# Settings are read at import time: make sure auth is configured and the app engine
# never points at a real database.
os.environ.setdefault("JWT_SECRET", "test_jwt_secret")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobboard.core.base import Base
from jobboard.core import config as app_config
from jobboard.core.security import create_access_token, hash_password

# Import models so they register with SQLAlchemy metadata.
from jobboard.models.user import User
from jobboard.models.job import Job
from jobboard.models.application import Application  # noqa: F401

from jobboard.core.database import get_db

TEST_PASSWORD = "test_password_123"


@pytest.fixture(scope="session")
def db_engine():
    # In-memory SQLite for fast, isolated tests.
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture()
def db_session(db_engine):
    # StaticPool keeps one in-memory DB for the whole run; reset the schema per test.
    Base.metadata.drop_all(bind=db_engine)
    Base.metadata.create_all(bind=db_engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def _reset_mutable_settings():
    """
    Tests sometimes tweak the process-global settings object; restore after each test.
    """
    keys = ["PASSWORD_MIN_LENGTH", "PASSWORD_RESET_EXPIRE_MINUTES", "ACCESS_TOKEN_EXPIRE_MINUTES"]
    original = {k: getattr(app_config.settings, k) for k in keys}
    try:
        yield
    finally:
        for k, v in original.items():
            setattr(app_config.settings, k, v)


@pytest.fixture()
def sent_emails(monkeypatch):
    """
    Capture outgoing mail instead of hitting a provider. Each entry is (to, subject, body).
    """
    from jobboard.services import auth as auth_service

    outbox: list[tuple[str, str, str]] = []

    def fake_send(to_email, subject, body):
        outbox.append((to_email, subject, body))
        return "msg_test_123"

    monkeypatch.setattr(auth_service, "send_email", fake_send)
    return outbox


@pytest.fixture()
def app(db_session, sent_emails):
    from jobboard.main import app as fastapi_app

    def override_get_db():
        yield db_session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def users(db_session):
    """
    Two distinct users: user_a posts jobs, user_b applies to them.
    """
    user_a = User(
        email="poster@example.com",
        first_name="Paula",
        last_name="Poster",
        password_hash=hash_password(TEST_PASSWORD),
    )
    user_b = User(
        email="seeker@example.com",
        first_name="Sam",
        last_name="Seeker",
        password_hash=hash_password(TEST_PASSWORD),
    )
    db_session.add_all([user_a, user_b])
    db_session.commit()
    db_session.refresh(user_a)
    db_session.refresh(user_b)
    return user_a, user_b


@pytest.fixture()
def auth_header():
    """
    Bearer header for a user. Tokens default to one issued an hour ago so a password
    change made during the test is strictly newer.
    """

    def _auth_header(user: User, *, issued_at: datetime | None = None) -> dict[str, str]:
        iat = issued_at or datetime.now(timezone.utc) - timedelta(hours=1)
        return {"Authorization": f"Bearer {create_access_token(user.id, issued_at=iat)}"}

    return _auth_header


@pytest.fixture()
def job_by_a(db_session, users):
    user_a, _ = users
    job = Job(title="Backend Engineer", company="Acme", location="Remote", posted_by_id=user_a.id)
    db_session.add(job)
    db_session.commit()
    db_session.refresh(job)
    return job
