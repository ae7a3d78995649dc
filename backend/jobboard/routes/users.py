from __future__ import annotations

from fastapi import APIRouter, Depends

from jobboard.dependencies.auth import get_current_user
from jobboard.models.user import User
from jobboard.schemas.user import UserMeOut, UserOut

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserMeOut)
def get_me(user: User = Depends(get_current_user)):
    return {"status": "success", "data": {"user": UserOut.model_validate(user)}}
