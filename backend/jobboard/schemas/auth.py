# jobboard/schemas/auth.py
from pydantic import BaseModel, EmailStr, Field

from jobboard.schemas.user import UserData


class SignupIn(BaseModel):
    email: EmailStr
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    about: str | None = Field(default=None, max_length=2000)
    password: str | None = Field(default=None, max_length=256)
    password_confirm: str | None = Field(default=None, max_length=256)


# Missing fields are reported by the service as a bad request, not as a schema error.
class LoginIn(BaseModel):
    email: str | None = None
    password: str | None = None


class ForgotPasswordIn(BaseModel):
    email: str | None = None


class ResetPasswordIn(BaseModel):
    password: str | None = None
    password_confirm: str | None = None


class UpdatePasswordIn(BaseModel):
    old_password: str | None = None
    new_password: str | None = None
    password_confirm: str | None = None


class TokenOut(BaseModel):
    status: str = "success"
    message: str | None = None
    token: str
    data: UserData


class MessageOut(BaseModel):
    status: str = "success"
    data: None = None
    message: str
