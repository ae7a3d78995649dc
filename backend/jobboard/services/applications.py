from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from jobboard.core.errors import BusinessRuleError, NotFoundError
from jobboard.models.application import Application
from jobboard.models.job import Job
from jobboard.models.user import User

logger = logging.getLogger(__name__)


def get_job(db: Session, job_id: int) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise NotFoundError("No job found with that ID")
    return job


def post_job(db: Session, user: User, data: dict) -> Job:
    job = Job(**data)
    job.posted_by_id = user.id  # ownership

    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def apply_for_job(db: Session, job_id: int, applicant: User, data: dict) -> Application:
    """
    Raises:
        NotFoundError: the job does not exist.
        BusinessRuleError: the applicant posted the job.
    """
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise NotFoundError("The job you want to apply does not exist!")

    if job.posted_by_id == applicant.id:
        raise BusinessRuleError("You cannot apply for the job posted by yourself!")

    # TODO: reject repeat applications once (job_id, applicant_id) gets a unique constraint.
    application = Application(**data)
    # job and applicant always come from the route and the session, never the body
    application.job_id = job.id
    application.applicant_id = applicant.id

    db.add(application)
    db.commit()
    db.refresh(application)

    logger.info("Application id=%s created: job_id=%s applicant_id=%s", application.id, job.id, applicant.id)
    return application
