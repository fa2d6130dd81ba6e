# This project was developed with assistance from AI tools.
"""Section completeness report schemas."""

from db.enums import SectionStatus, TransactionType
from pydantic import BaseModel, ConfigDict

from .override import SectionOverride


class SectionCompleteness(BaseModel):
    """A single required section with its resolved state."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    satisfied: bool
    overridden: bool
    status: SectionStatus
    override: SectionOverride | None = None


class CompletenessReport(BaseModel):
    """Completeness summary for an application."""

    model_config = ConfigDict(frozen=True)

    application_id: str
    transaction_type: TransactionType
    completed_count: int
    total_count: int
    completion_percentage: int
    can_submit: bool
    per_section: list[SectionCompleteness]

    @property
    def missing_sections(self) -> list[str]:
        """Keys of required sections that are not satisfied."""
        return [s.key for s in self.per_section if not s.satisfied]
