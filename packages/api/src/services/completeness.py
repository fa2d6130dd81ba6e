# This project was developed with assistance from AI tools.
"""Application completeness evaluation.

Determines which sections are required for a transaction type, then folds in
the stored section flags and any manual overrides to produce a completeness
report. This is the single answer to "can this application be submitted?"
used by the applicant review page, the broker submit page and the broker QA
checklist.

Pure: no I/O, no mutation, same inputs give an equal report.
"""

import logging
from collections.abc import Iterable

from db.enums import SectionStatus, TransactionType

from ..core.errors import ConfigurationError, ValidationError
from ..schemas.application import ApplicationAggregate
from ..schemas.completeness import CompletenessReport, SectionCompleteness
from ..schemas.override import SectionOverride
from .section_rules import (
    DISCLOSURES,
    DOCUMENTS,
    FINANCIALS,
    INCOME,
    PROFILE,
    SECTION_LABELS,
    WARNING_SECTIONS,
    assess_section,
)

logger = logging.getLogger(__name__)

BASE_SECTIONS: tuple[str, ...] = (PROFILE, INCOME, FINANCIALS, DOCUMENTS)


def resolve_transaction_type(value: str) -> TransactionType:
    """Coerce a raw transaction type, failing loudly on unknown values."""
    try:
        return TransactionType(value)
    except ValueError as exc:
        raise ConfigurationError(f"Unrecognized transaction type: {value!r}") from exc


def required_sections(transaction_type: TransactionType | str) -> tuple[str, ...]:
    """Section keys that count toward completeness for a transaction type.

    Disclosures only apply to lease and sublet transactions; for purchases
    they are excluded from both numerator and denominator.
    """
    tx = resolve_transaction_type(transaction_type)
    if tx in TransactionType.lease_or_sublet():
        return BASE_SECTIONS + (DISCLOSURES,)
    return BASE_SECTIONS


def completion_percentage(completed: int, total: int) -> int:
    """Round ``100 * completed / total`` half-up to an integer; 0 when total is 0."""
    if total == 0:
        return 0
    return (200 * completed + total) // (2 * total)


def active_overrides(
    application_id: str,
    overrides: Iterable[SectionOverride],
) -> dict[str, SectionOverride]:
    """Map section key -> most recent override for this application.

    Later entries win ties on ``overridden_at`` so that list order (append
    order) breaks them.
    """
    latest: dict[str, SectionOverride] = {}
    for override in overrides:
        if override.application_id != application_id:
            continue
        current = latest.get(override.section_key)
        if current is None or override.overridden_at >= current.overridden_at:
            latest[override.section_key] = override
    return latest


class CompletenessEvaluator:
    """Computes per-section completion and the submission gate.

    Args:
        allow_warning_sections: When True, a required section in a warning
            state (financials with no entries) does not block submission.
            It still counts as not completed in the percentage.
    """

    def __init__(self, *, allow_warning_sections: bool = False):
        self.allow_warning_sections = allow_warning_sections

    def evaluate(
        self,
        application: ApplicationAggregate,
        overrides: Iterable[SectionOverride] = (),
    ) -> CompletenessReport:
        if not application.sections:
            raise ValidationError(f"Application {application.id} has no sections")

        tx = resolve_transaction_type(application.transaction_type)
        required = required_sections(tx)
        by_key = {s.key: s for s in application.sections}
        overridden = active_overrides(application.id, overrides)

        per_section: list[SectionCompleteness] = []
        completed = 0
        gate_open = True
        for key in required:
            section = by_key.get(key)
            is_complete = bool(section and section.is_complete)
            override = overridden.get(key)
            satisfied = is_complete or override is not None

            if is_complete:
                status = SectionStatus.COMPLETE
            elif override is not None:
                status = SectionStatus.OVERRIDDEN
            elif key in WARNING_SECTIONS and assess_section(application, key) == SectionStatus.WARNING:
                status = SectionStatus.WARNING
            else:
                status = SectionStatus.INCOMPLETE

            if satisfied:
                completed += 1
            elif not (status == SectionStatus.WARNING and self.allow_warning_sections):
                gate_open = False

            per_section.append(
                SectionCompleteness(
                    key=key,
                    label=section.label if section else SECTION_LABELS[key],
                    satisfied=satisfied,
                    overridden=override is not None,
                    status=status,
                    override=override,
                )
            )

        total = len(required)
        report = CompletenessReport(
            application_id=application.id,
            transaction_type=tx,
            completed_count=completed,
            total_count=total,
            completion_percentage=completion_percentage(completed, total),
            can_submit=gate_open,
            per_section=per_section,
        )
        logger.debug(
            "Evaluated application %s: %d/%d (%d%%), can_submit=%s",
            application.id,
            completed,
            total,
            report.completion_percentage,
            report.can_submit,
        )
        return report


def evaluate(
    application: ApplicationAggregate,
    overrides: Iterable[SectionOverride] = (),
    *,
    allow_warning_sections: bool = False,
) -> CompletenessReport:
    """Evaluate ``application`` with a one-off evaluator."""
    evaluator = CompletenessEvaluator(allow_warning_sections=allow_warning_sections)
    return evaluator.evaluate(application, overrides)
