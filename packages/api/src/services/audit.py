# This project was developed with assistance from AI tools.
"""Audit event service.

Writes append-only audit trail entries with a SHA-256 hash chain for tamper
evidence. Each entry's ``prev_hash`` is the hash of the entry before it;
the first entry links to ``"genesis"``. Storage is delegated to an
AuditRepository so the same chain logic runs in memory and on the database.
"""

import hashlib
import json
import logging
from datetime import datetime

from ..schemas.audit import AuditEventItem
from .repository import AuditRepository

logger = logging.getLogger(__name__)

GENESIS_HASH = "genesis"


def compute_hash(event: AuditEventItem) -> str:
    """Compute SHA-256 hash of an audit event's key fields."""
    body = {
        "action": event.action,
        "application_id": event.application_id,
        "section": event.section,
        "performed_by": event.performed_by,
        "reason": event.reason,
        "previous_status": event.previous_status,
        "new_status": event.new_status,
        "event_data": event.event_data,
    }
    payload = (
        f"{event.id}|{event.timestamp.isoformat()}|"
        f"{json.dumps(body, sort_keys=True, default=str)}"
    )
    return hashlib.sha256(payload.encode()).hexdigest()


def write_audit_event(
    repository: AuditRepository,
    *,
    action: str,
    timestamp: datetime,
    application_id: str | None = None,
    section: str | None = None,
    performed_by: str | None = None,
    reason: str | None = None,
    previous_status: str | None = None,
    new_status: str | None = None,
    event_data: dict | None = None,
) -> AuditEventItem:
    """Append a single audit event with hash chain linkage.

    Args:
        repository: Audit storage; serializes chain computation if needed.
        action: Event category (e.g. 'MANUAL_OVERRIDE').
        timestamp: When the audited action happened.
        application_id: Related application, if any.
        section: Related section key, if any.
        performed_by: Actor identity.
        reason: Free-text justification supplied by the actor.
        previous_status: State before the action.
        new_status: State after the action.
        event_data: Arbitrary JSON-serializable payload.

    Returns:
        The stored event (with id and prev_hash set).
    """
    prev_event = repository.latest()
    prev_hash = compute_hash(prev_event) if prev_event is not None else GENESIS_HASH

    event = AuditEventItem(
        action=action,
        application_id=application_id,
        section=section,
        performed_by=performed_by,
        timestamp=timestamp,
        reason=reason,
        previous_status=previous_status,
        new_status=new_status,
        event_data=event_data,
        prev_hash=prev_hash,
    )
    stored = repository.append(event)
    logger.debug("Audit event %s written: action=%s app=%s", stored.id, action, application_id)
    return stored


def verify_audit_chain(events: list[AuditEventItem]) -> dict:
    """Verify the integrity of an audit event hash chain.

    ``events`` must be the full chain in id order.

    Returns:
        {"status": "OK", "events_checked": N} on success, or
        {"status": "TAMPERED", "first_break_id": id, "events_checked": N}
        if a mismatch is found.
    """
    if not events:
        return {"status": "OK", "events_checked": 0}

    for i, event in enumerate(events):
        expected = GENESIS_HASH if i == 0 else compute_hash(events[i - 1])
        if event.prev_hash != expected:
            logger.warning("Audit chain broken at event %s", event.id)
            return {
                "status": "TAMPERED",
                "first_break_id": event.id,
                "events_checked": i + 1,
            }

    return {"status": "OK", "events_checked": len(events)}


def get_events_by_application(
    repository: AuditRepository,
    application_id: str,
) -> list[AuditEventItem]:
    """Return all audit events for an application, oldest first."""
    return repository.list_for_application(application_id)
