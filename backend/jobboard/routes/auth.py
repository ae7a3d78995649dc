# jobboard/routes/auth.py
from fastapi import APIRouter, Depends, Request, status

from jobboard.core.config import settings
from jobboard.core.rate_limit import maybe_limit
from jobboard.dependencies.auth import get_auth_service, get_current_user
from jobboard.models.user import User
from jobboard.schemas.auth import (
    ForgotPasswordIn,
    LoginIn,
    MessageOut,
    ResetPasswordIn,
    SignupIn,
    TokenOut,
    UpdatePasswordIn,
)
from jobboard.schemas.user import UserOut
from jobboard.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(user: User, token: str, message: str) -> dict:
    return {
        "status": "success",
        "message": message,
        "token": token,
        "data": {"user": UserOut.model_validate(user)},
    }


@router.post("/signup", response_model=TokenOut, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupIn, auth: AuthService = Depends(get_auth_service)):
    user, token = auth.signup(
        email=payload.email,
        password=payload.password,
        password_confirm=payload.password_confirm,
        first_name=payload.first_name,
        last_name=payload.last_name,
        about=payload.about,
    )
    return _token_response(user, token, "User created successfully!")


@router.post("/login", response_model=TokenOut)
@maybe_limit(settings.LOGIN_RATE_LIMIT)
def login(request: Request, payload: LoginIn, auth: AuthService = Depends(get_auth_service)):
    user, token = auth.login(payload.email, payload.password)
    return _token_response(user, token, "Logged in successfully!")


@router.post("/forgot-password", response_model=MessageOut)
@maybe_limit(settings.FORGOT_PASSWORD_RATE_LIMIT)
def forgot_password(
    request: Request,
    payload: ForgotPasswordIn,
    auth: AuthService = Depends(get_auth_service),
):
    # Link points back at this API: <scheme>://<host>/auth/reset-password/<token>
    auth.forgot_password(payload.email, str(request.base_url))
    return {"status": "success", "data": None, "message": "Email sent successfully!"}


@router.api_route("/reset-password/{token}", methods=["PATCH", "POST"], response_model=TokenOut)
def reset_password(
    token: str,
    payload: ResetPasswordIn,
    auth: AuthService = Depends(get_auth_service),
):
    user, new_token = auth.reset_password(token, payload.password, payload.password_confirm)
    return _token_response(user, new_token, "Password updated!")


@router.patch("/update-password", response_model=TokenOut)
def update_password(
    payload: UpdatePasswordIn,
    user: User = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
):
    updated, token = auth.update_password(
        user.id,
        payload.old_password,
        payload.new_password,
        payload.password_confirm,
    )
    return _token_response(updated, token, "Password updated!")
