# This project was developed with assistance from AI tools.
"""Audit trail schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AuditEventItem(BaseModel):
    """Single append-only audit entry."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    action: str
    application_id: str | None = None
    section: str | None = None
    performed_by: str | None = None
    timestamp: datetime
    reason: str | None = None
    previous_status: str | None = None
    new_status: str | None = None
    event_data: dict | None = None
    prev_hash: str | None = None


class AuditChainVerifyResponse(BaseModel):
    """Response for audit hash chain verification."""

    status: str
    events_checked: int
    first_break_id: int | None = None


class AuditByApplicationResponse(BaseModel):
    """Response for audit trail query by application ID."""

    application_id: str
    count: int
    events: list[AuditEventItem]
    chain: AuditChainVerifyResponse
