# This project was developed with assistance from AI tools.
"""Application submission schemas."""

from datetime import datetime

from db.enums import ApplicationStatus
from pydantic import BaseModel

from .completeness import CompletenessReport


class SubmissionResponse(BaseModel):
    """Result of submitting an application for board review."""

    application_id: str
    status: ApplicationStatus
    submitted_at: datetime
    is_locked: bool
    report: CompletenessReport
    message: str = "Application submitted successfully"
