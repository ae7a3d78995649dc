from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobboard.core.database import get_db
from jobboard.dependencies.auth import get_current_user
from jobboard.models.user import User
from jobboard.schemas.job import JobCreate, JobEnvelopeOut, JobOut
from jobboard.services.applications import get_job, post_job

router = APIRouter(prefix="/jobs", tags=["jobs"], dependencies=[Depends(get_current_user)])


@router.post("", response_model=JobEnvelopeOut, status_code=status.HTTP_201_CREATED)
def create_job(
    payload: JobCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    job = post_job(db, user, payload.model_dump())
    return {"status": "success", "data": {"job": JobOut.model_validate(job)}}


@router.get("/{job_id}", response_model=JobEnvelopeOut)
def read_job(job_id: int, db: Session = Depends(get_db)):
    return {"status": "success", "data": {"job": JobOut.model_validate(get_job(db, job_id))}}
