# This project was developed with assistance from AI tools.
"""Manual completeness overrides.

A broker or transaction agent can mark an incomplete section as complete
with a mandatory reason. Overrides are append-only and never revoked: the
active override for a section is simply the most recent one recorded. Each
override is also written to the audit trail as a MANUAL_OVERRIDE event for
compliance review.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from db.enums import AuditAction

from ..core.errors import ValidationError
from ..schemas.override import SectionOverride
from .audit import write_audit_event
from .repository import AuditRepository, OverrideRepository

logger = logging.getLogger(__name__)

PREVIOUS_STATUS = "incomplete"
NEW_STATUS = "complete_override"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class OverrideLedger:
    """Append-only ledger of section overrides.

    Args:
        overrides: Storage for override records (completeness lookups).
        audit: Storage for the generic audit trail (compliance reporting).
        clock: Returns the current time; injectable for tests.
    """

    def __init__(
        self,
        overrides: OverrideRepository,
        audit: AuditRepository,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._overrides = overrides
        self._audit = audit
        self._clock = clock

    def record_override(
        self,
        application_id: str,
        section_key: str,
        section_label: str,
        overridden_by: str,
        reason: str,
    ) -> SectionOverride:
        """Record an override and its audit entry.

        Raises:
            ValidationError: ``reason`` is empty after trimming. Nothing is
                written in that case.
        """
        cleaned = (reason or "").strip()
        if not cleaned:
            logger.warning(
                "Rejected override without reason: app=%s section=%s by=%s",
                application_id,
                section_key,
                overridden_by,
            )
            raise ValidationError("A reason is required to override a section")

        now = self._clock()
        override = SectionOverride(
            application_id=application_id,
            section_key=section_key,
            section_label=section_label,
            overridden_by=overridden_by,
            overridden_at=now,
            reason=cleaned,
        )
        stored = self._overrides.append(override)
        write_audit_event(
            self._audit,
            action=AuditAction.MANUAL_OVERRIDE.value,
            timestamp=now,
            application_id=application_id,
            section=section_key,
            performed_by=overridden_by,
            reason=cleaned,
            previous_status=PREVIOUS_STATUS,
            new_status=NEW_STATUS,
            event_data={"section_label": section_label},
        )
        logger.info(
            "Section override recorded: app=%s section=%s by=%s",
            application_id,
            section_key,
            overridden_by,
        )
        return stored

    def get_active_override(self, application_id: str, section_key: str) -> SectionOverride | None:
        """Most recent override for the section, or None if never overridden."""
        return self._overrides.latest_for_section(application_id, section_key)

    def list_overrides(self, application_id: str) -> list[SectionOverride]:
        """Full override history for an application, oldest first."""
        return self._overrides.list_for_application(application_id)
