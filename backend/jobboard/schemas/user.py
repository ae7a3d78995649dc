from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


# No password_hash / password_changed_at / reset fields.
class UserOut(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    about: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserData(BaseModel):
    user: UserOut


class UserMeOut(BaseModel):
    status: str = "success"
    data: UserData
