# jobboard/dependencies/auth.py
from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from jobboard.core.database import get_db
from jobboard.models.user import User
from jobboard.services.auth import AuthService
from jobboard.services.users import UserStore

# auto_error=False: a missing header must produce our own 401, not FastAPI's 403.
bearer_scheme = HTTPBearer(auto_error=False)


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    return UserStore(db)


def get_auth_service(store: UserStore = Depends(get_user_store)) -> AuthService:
    return AuthService(store)


def get_current_user(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """
    Protect gate. Validates:
      - Authorization: Bearer <token>
      - token signature + exp
      - user still exists
      - password not changed since the token was issued
    The resolved user is also stored on request.state.user.
    """
    token = creds.credentials if creds and creds.scheme.lower() == "bearer" else None
    user = auth.protect(token)
    request.state.user = user
    return user
