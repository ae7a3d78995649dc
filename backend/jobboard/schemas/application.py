from typing import Optional

from pydantic import BaseModel, Field


# job and applicant are set server-side; anything else in the body is ignored.
class ApplicationIn(BaseModel):
    cover_letter: Optional[str] = Field(default=None, max_length=5000)
