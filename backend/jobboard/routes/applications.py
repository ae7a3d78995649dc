from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.core.database import get_db
from jobboard.dependencies.auth import get_current_user
from jobboard.models.user import User
from jobboard.schemas.application import ApplicationIn
from jobboard.schemas.auth import MessageOut
from jobboard.services.applications import apply_for_job

router = APIRouter(prefix="/applications", tags=["applications"])


@router.post("/apply-for-job/{job_id}", response_model=MessageOut)
def apply(
    job_id: int,
    payload: Optional[ApplicationIn] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    data = payload.model_dump() if payload else {}
    apply_for_job(db, job_id, user, data)
    return {"status": "success", "data": None, "message": "Application sent!"}
