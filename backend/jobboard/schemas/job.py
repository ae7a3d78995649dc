from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class JobCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    company: str = Field(min_length=1, max_length=255)
    location: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None


class JobOut(BaseModel):
    id: int
    title: str
    company: str
    location: Optional[str]
    description: Optional[str]
    posted_by_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class JobData(BaseModel):
    job: JobOut


class JobEnvelopeOut(BaseModel):
    status: str = "success"
    data: JobData
