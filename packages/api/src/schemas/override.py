# This project was developed with assistance from AI tools.
"""Manual section override schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SectionOverride(BaseModel):
    """Immutable record of a broker/agent marking a section complete."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    application_id: str
    section_key: str
    section_label: str
    overridden_by: str
    overridden_at: datetime
    reason: str


class OverrideCreate(BaseModel):
    """Request body for recording an override.

    The reason is checked for blankness by the ledger, not here, so the
    rejection surfaces as the domain ValidationError.
    """

    section_key: str = Field(min_length=1, max_length=50)
    section_label: str | None = Field(
        default=None,
        description="Display label; defaults to the section's current label.",
    )
    reason: str


class OverrideListResponse(BaseModel):
    application_id: str
    count: int
    overrides: list[SectionOverride]
