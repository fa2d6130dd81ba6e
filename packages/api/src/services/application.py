# This project was developed with assistance from AI tools.
"""Application completeness workflows.

Glue between the application store, the override ledger and the evaluator:
completeness lookups, section flag recomputation, and submission gating.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from db.enums import ApplicationStatus, AuditAction

from ..core.errors import (
    AlreadySubmittedError,
    ApplicationIncompleteError,
    ApplicationNotFoundError,
    InvalidTransitionError,
)
from ..schemas.application import ApplicationAggregate
from ..schemas.auth import UserContext
from ..schemas.completeness import CompletenessReport
from ..schemas.override import SectionOverride
from ..schemas.submission import SubmissionResponse
from .audit import write_audit_event
from .completeness import CompletenessEvaluator
from .overrides import OverrideLedger
from .repository import ApplicationRepository, AuditRepository
from .section_rules import SECTION_LABELS, derive_sections

logger = logging.getLogger(__name__)

_ALREADY_SUBMITTED = frozenset({ApplicationStatus.SUBMITTED, ApplicationStatus.IN_REVIEW})
_VALID_TRANSITIONS = ApplicationStatus.valid_transitions()
_DECIDED = ApplicationStatus.terminal_statuses()


def _load(applications: ApplicationRepository, application_id: str) -> ApplicationAggregate:
    app = applications.get(application_id)
    if app is None:
        raise ApplicationNotFoundError(f"Application {application_id} not found")
    return app


def get_completeness(
    applications: ApplicationRepository,
    ledger: OverrideLedger,
    evaluator: CompletenessEvaluator,
    application_id: str,
) -> CompletenessReport:
    """Evaluate the stored application against its override history."""
    app = _load(applications, application_id)
    return evaluator.evaluate(app, ledger.list_overrides(application_id))


def list_overrides(
    applications: ApplicationRepository,
    ledger: OverrideLedger,
    application_id: str,
) -> list[SectionOverride]:
    """Override history for an existing application, oldest first."""
    _load(applications, application_id)
    return ledger.list_overrides(application_id)


def record_override(
    applications: ApplicationRepository,
    ledger: OverrideLedger,
    application_id: str,
    section_key: str,
    section_label: str | None,
    overridden_by: str,
    reason: str,
) -> SectionOverride:
    """Record an override on an application that is still open for edits.

    The label defaults to the section's current label, then to the
    standard label for the key.

    Raises:
        ApplicationNotFoundError: Unknown application id.
        InvalidTransitionError: The application is locked.
        ValidationError: Blank reason.
    """
    app = _load(applications, application_id)
    if app.is_locked:
        raise InvalidTransitionError(f"Application {application_id} is locked")
    label = section_label
    if not label:
        section = app.section(section_key)
        label = section.label if section else SECTION_LABELS.get(section_key, section_key)
    return ledger.record_override(application_id, section_key, label, overridden_by, reason)


def recompute_sections(
    applications: ApplicationRepository,
    ledger: OverrideLedger,
    evaluator: CompletenessEvaluator,
    audit: AuditRepository,
    application_id: str,
    user: UserContext,
    clock: Callable[[], datetime] = lambda: datetime.now(UTC),
) -> tuple[ApplicationAggregate, CompletenessReport]:
    """Re-derive section flags from application data and persist them."""
    app = _load(applications, application_id)
    if app.is_locked:
        raise InvalidTransitionError(f"Application {application_id} is locked")
    updated = derive_sections(app)
    report = evaluator.evaluate(updated, ledger.list_overrides(application_id))
    applications.save_sections(application_id, updated.sections, report.completion_percentage)

    changed = {
        new.key: new.is_complete
        for old, new in zip(app.sections, updated.sections)
        if old.is_complete != new.is_complete
    }
    if changed:
        write_audit_event(
            audit,
            action=AuditAction.SECTIONS_RECOMPUTED.value,
            timestamp=clock(),
            application_id=application_id,
            performed_by=user.user_id,
            event_data={"changed": changed},
        )
    return updated.model_copy(update={"completion_percentage": report.completion_percentage}), report


def submit_application(
    applications: ApplicationRepository,
    ledger: OverrideLedger,
    evaluator: CompletenessEvaluator,
    audit: AuditRepository,
    application_id: str,
    user: UserContext,
    clock: Callable[[], datetime] = lambda: datetime.now(UTC),
) -> SubmissionResponse:
    """Submit an application for board review.

    Raises:
        ApplicationNotFoundError: Unknown application id.
        AlreadySubmittedError: Already SUBMITTED or IN_REVIEW.
        InvalidTransitionError: Current status cannot move to SUBMITTED.
        ApplicationIncompleteError: Some required section is unsatisfied.
    """
    app = _load(applications, application_id)

    if app.status in _ALREADY_SUBMITTED:
        raise AlreadySubmittedError(f"Application {application_id} has already been submitted")
    if app.status in _DECIDED:
        raise InvalidTransitionError(
            f"Application {application_id} already has a board decision ({app.status.value})"
        )
    if ApplicationStatus.SUBMITTED not in _VALID_TRANSITIONS[app.status]:
        raise InvalidTransitionError(
            f"Cannot submit application {application_id} from status {app.status.value}"
        )

    report = evaluator.evaluate(app, ledger.list_overrides(application_id))
    if not report.can_submit:
        raise ApplicationIncompleteError(
            "Application is not complete and cannot be submitted",
            missing_sections=report.missing_sections,
        )

    now = clock()
    applications.mark_submitted(
        application_id,
        status=ApplicationStatus.SUBMITTED,
        submitted_at=now,
        completion_percentage=report.completion_percentage,
    )
    write_audit_event(
        audit,
        action=AuditAction.APPLICATION_SUBMITTED.value,
        timestamp=now,
        application_id=application_id,
        performed_by=user.user_id,
        previous_status=app.status.value,
        new_status=ApplicationStatus.SUBMITTED.value,
        event_data={
            "completion_percentage": report.completion_percentage,
            "overridden_sections": [s.key for s in report.per_section if s.overridden],
        },
    )
    logger.info("Application %s submitted by %s", application_id, user.user_id)

    return SubmissionResponse(
        application_id=application_id,
        status=ApplicationStatus.SUBMITTED,
        submitted_at=now,
        is_locked=True,
        report=report,
    )
