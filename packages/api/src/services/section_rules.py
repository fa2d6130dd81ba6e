# This project was developed with assistance from AI tools.
"""Data-driven section rules.

Derives whether each base section is complete from the application's own
records (people, employment, financial entries, documents, disclosures).
The completeness evaluator reads the stored ``is_complete`` flags; these
rules are what keeps those flags honest when applicant data changes.
"""

import logging
from collections.abc import Callable

from db.enums import DocumentCategory, DocumentStatus, PersonRole, SectionStatus

from ..schemas.application import ApplicationAggregate

logger = logging.getLogger(__name__)

PROFILE = "profile"
INCOME = "income"
FINANCIALS = "financials"
DOCUMENTS = "documents"
DISCLOSURES = "disclosures"

SECTION_LABELS: dict[str, str] = {
    PROFILE: "Profile complete",
    INCOME: "Employment/income documented",
    FINANCIALS: "Financials complete",
    DOCUMENTS: "Documents uploaded",
    DISCLOSURES: "Disclosures acknowledged",
}

# Sections whose missing data is a soft warning rather than a hard gap
WARNING_SECTIONS = frozenset({FINANCIALS})


def _profile_status(app: ApplicationAggregate) -> SectionStatus:
    for person in app.people:
        if (
            person.role == PersonRole.APPLICANT
            and person.first_name
            and person.last_name
            and person.email
        ):
            return SectionStatus.COMPLETE
    return SectionStatus.INCOMPLETE


def _income_status(app: ApplicationAggregate) -> SectionStatus:
    return SectionStatus.COMPLETE if app.employment_records else SectionStatus.INCOMPLETE


def _financials_status(app: ApplicationAggregate) -> SectionStatus:
    # Financial entries strengthen the package but are not mandatory data
    return SectionStatus.COMPLETE if app.financial_entries else SectionStatus.WARNING


def _documents_status(app: ApplicationAggregate) -> SectionStatus:
    has_govt_id = any(
        d.category == DocumentCategory.GOVERNMENT_ID and d.status != DocumentStatus.REJECTED
        for d in app.documents
    )
    return SectionStatus.COMPLETE if has_govt_id else SectionStatus.INCOMPLETE


def _disclosures_status(app: ApplicationAggregate) -> SectionStatus:
    if app.disclosures and all(d.acknowledged for d in app.disclosures):
        return SectionStatus.COMPLETE
    return SectionStatus.INCOMPLETE


_RULES: dict[str, Callable[[ApplicationAggregate], SectionStatus]] = {
    PROFILE: _profile_status,
    INCOME: _income_status,
    FINANCIALS: _financials_status,
    DOCUMENTS: _documents_status,
    DISCLOSURES: _disclosures_status,
}


def assess_section(app: ApplicationAggregate, key: str) -> SectionStatus | None:
    """Assess one section from application data.

    Returns None for section keys without a data rule (``parties``,
    ``lease-terms``, ...); those keep whatever flag the form handler set.
    """
    rule = _RULES.get(key)
    if rule is None:
        return None
    return rule(app)


def derive_sections(app: ApplicationAggregate) -> ApplicationAggregate:
    """Return a copy of ``app`` with rule-backed section flags recomputed.

    Only ``complete`` sets the flag; a warning leaves the section incomplete
    so that it is still surfaced by the checklist.
    """
    sections = []
    for section in app.sections:
        status = assess_section(app, section.key)
        if status is None:
            sections.append(section)
            continue
        sections.append(
            section.model_copy(update={"is_complete": status == SectionStatus.COMPLETE})
        )
    changed = [
        new.key for old, new in zip(app.sections, sections) if old.is_complete != new.is_complete
    ]
    if changed:
        logger.info("Application %s section flags changed: %s", app.id, changed)
    return app.model_copy(update={"sections": sections})
