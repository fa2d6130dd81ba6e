# This project was developed with assistance from AI tools.
"""Storage ports for applications, overrides and audit events.

Each port has an in-memory implementation (tests, local tooling) and a
SQLAlchemy implementation. The SQLAlchemy repositories take a synchronous
``Session``; async routes reach them through ``AsyncSession.run_sync`` so
the completeness services stay synchronous.
"""

import itertools
import logging
from datetime import UTC, datetime
from typing import Protocol

from db import (
    Application,
    ApplicationSection,
    AuditEvent,
    Disclosure,
    Document,
    EmploymentRecord,
    FinancialEntry,
    Participant,
    Person,
    RealEstateProperty,
    SectionOverride,
)
from db.enums import ApplicationStatus
from sqlalchemy import select, text
from sqlalchemy.orm import Session, selectinload

from ..schemas import application as app_schemas
from ..schemas.application import ApplicationAggregate
from ..schemas.audit import AuditEventItem
from ..schemas.override import SectionOverride as SectionOverrideSchema

logger = logging.getLogger(__name__)

# Fixed advisory lock key for audit trail serialization (PostgreSQL only).
AUDIT_LOCK_KEY = 910_001


def _as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on round trip)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


# ---------------------------------------------------------------------------
# Ports
# ---------------------------------------------------------------------------


class ApplicationRepository(Protocol):
    def get(self, application_id: str) -> ApplicationAggregate | None: ...

    def add(self, application: ApplicationAggregate) -> ApplicationAggregate: ...

    def save_sections(
        self,
        application_id: str,
        sections: list[app_schemas.ApplicationSection],
        completion_percentage: int,
    ) -> None: ...

    def mark_submitted(
        self,
        application_id: str,
        *,
        status: ApplicationStatus,
        submitted_at: datetime,
        completion_percentage: int,
    ) -> None: ...


class OverrideRepository(Protocol):
    def append(self, override: SectionOverrideSchema) -> SectionOverrideSchema: ...

    def list_for_application(self, application_id: str) -> list[SectionOverrideSchema]: ...

    def latest_for_section(
        self, application_id: str, section_key: str
    ) -> SectionOverrideSchema | None: ...


class AuditRepository(Protocol):
    def latest(self) -> AuditEventItem | None: ...

    def append(self, event: AuditEventItem) -> AuditEventItem: ...

    def list_all(self) -> list[AuditEventItem]: ...

    def list_for_application(self, application_id: str) -> list[AuditEventItem]: ...


# ---------------------------------------------------------------------------
# In-memory implementations
# ---------------------------------------------------------------------------


class InMemoryApplicationRepository:
    def __init__(self, applications: list[ApplicationAggregate] | None = None):
        self._apps: dict[str, ApplicationAggregate] = {}
        for app in applications or []:
            self.add(app)

    def get(self, application_id: str) -> ApplicationAggregate | None:
        return self._apps.get(application_id)

    def add(self, application: ApplicationAggregate) -> ApplicationAggregate:
        self._apps[application.id] = application
        return application

    def save_sections(self, application_id, sections, completion_percentage) -> None:
        app = self._apps[application_id]
        self._apps[application_id] = app.model_copy(
            update={"sections": list(sections), "completion_percentage": completion_percentage}
        )

    def mark_submitted(self, application_id, *, status, submitted_at, completion_percentage) -> None:
        app = self._apps[application_id]
        self._apps[application_id] = app.model_copy(
            update={
                "status": status,
                "submitted_at": submitted_at,
                "is_locked": True,
                "completion_percentage": completion_percentage,
            }
        )


class InMemoryOverrideRepository:
    def __init__(self):
        self._entries: list[SectionOverrideSchema] = []

    def append(self, override: SectionOverrideSchema) -> SectionOverrideSchema:
        self._entries.append(override)
        return override

    def list_for_application(self, application_id: str) -> list[SectionOverrideSchema]:
        entries = [o for o in self._entries if o.application_id == application_id]
        # sorted() is stable: equal timestamps keep append order
        return sorted(entries, key=lambda o: o.overridden_at)

    def latest_for_section(self, application_id, section_key) -> SectionOverrideSchema | None:
        matches = [
            o for o in self.list_for_application(application_id) if o.section_key == section_key
        ]
        return matches[-1] if matches else None


class InMemoryAuditRepository:
    def __init__(self):
        self._events: list[AuditEventItem] = []
        self._ids = itertools.count(1)

    def latest(self) -> AuditEventItem | None:
        return self._events[-1] if self._events else None

    def append(self, event: AuditEventItem) -> AuditEventItem:
        stored = event.model_copy(update={"id": next(self._ids)})
        self._events.append(stored)
        return stored

    def list_all(self) -> list[AuditEventItem]:
        return list(self._events)

    def list_for_application(self, application_id: str) -> list[AuditEventItem]:
        return [e for e in self._events if e.application_id == application_id]


# ---------------------------------------------------------------------------
# SQLAlchemy implementations
# ---------------------------------------------------------------------------

_AGGREGATE_LOADS = (
    selectinload(Application.sections),
    selectinload(Application.people),
    selectinload(Application.employment_records),
    selectinload(Application.financial_entries),
    selectinload(Application.real_estate_properties),
    selectinload(Application.documents),
    selectinload(Application.disclosures),
    selectinload(Application.participants),
)


class SqlApplicationRepository:
    def __init__(self, session: Session):
        self.session = session

    def _load(self, application_id: str) -> Application | None:
        stmt = select(Application).options(*_AGGREGATE_LOADS).where(Application.id == application_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def get(self, application_id: str) -> ApplicationAggregate | None:
        row = self._load(application_id)
        if row is None:
            return None
        return ApplicationAggregate.model_validate(row)

    def add(self, application: ApplicationAggregate) -> ApplicationAggregate:
        row = Application(
            id=application.id,
            building_id=application.building_id,
            unit=application.unit,
            transaction_type=application.transaction_type,
            status=application.status,
            created_by=application.created_by,
            cover_letter=application.cover_letter,
            is_locked=application.is_locked,
            completion_percentage=application.completion_percentage,
            submitted_at=application.submitted_at,
        )
        row.sections = [
            ApplicationSection(key=s.key, label=s.label, is_complete=s.is_complete, position=i)
            for i, s in enumerate(application.sections)
        ]
        row.people = [
            Person(**p.model_dump(exclude={"address_history"}),
                   address_history=[a.model_dump() for a in p.address_history])
            for p in application.people
        ]
        row.employment_records = [EmploymentRecord(**e.model_dump()) for e in application.employment_records]
        row.financial_entries = [FinancialEntry(**f.model_dump()) for f in application.financial_entries]
        row.real_estate_properties = [
            RealEstateProperty(**r.model_dump()) for r in application.real_estate_properties
        ]
        row.documents = [Document(**d.model_dump()) for d in application.documents]
        row.disclosures = [Disclosure(**d.model_dump()) for d in application.disclosures]
        row.participants = [Participant(**p.model_dump()) for p in application.participants]
        self.session.add(row)
        self.session.flush()
        return application

    def save_sections(self, application_id, sections, completion_percentage) -> None:
        row = self._load(application_id)
        flags = {s.key: s.is_complete for s in sections}
        for section in row.sections:
            if section.key in flags:
                section.is_complete = flags[section.key]
        row.completion_percentage = completion_percentage
        self.session.flush()

    def mark_submitted(self, application_id, *, status, submitted_at, completion_percentage) -> None:
        row = self._load(application_id)
        row.status = status
        row.submitted_at = submitted_at
        row.is_locked = True
        row.completion_percentage = completion_percentage
        self.session.flush()


def _override_from_row(row: SectionOverride) -> SectionOverrideSchema:
    return SectionOverrideSchema(
        application_id=row.application_id,
        section_key=row.section_key,
        section_label=row.section_label,
        overridden_by=row.overridden_by,
        overridden_at=_as_utc(row.overridden_at),
        reason=row.reason,
    )


class SqlOverrideRepository:
    def __init__(self, session: Session):
        self.session = session

    def append(self, override: SectionOverrideSchema) -> SectionOverrideSchema:
        self.session.add(SectionOverride(**override.model_dump()))
        self.session.flush()
        return override

    def list_for_application(self, application_id: str) -> list[SectionOverrideSchema]:
        stmt = (
            select(SectionOverride)
            .where(SectionOverride.application_id == application_id)
            .order_by(SectionOverride.overridden_at.asc(), SectionOverride.id.asc())
        )
        return [_override_from_row(r) for r in self.session.execute(stmt).scalars().all()]

    def latest_for_section(self, application_id, section_key) -> SectionOverrideSchema | None:
        stmt = (
            select(SectionOverride)
            .where(
                SectionOverride.application_id == application_id,
                SectionOverride.section_key == section_key,
            )
            .order_by(SectionOverride.overridden_at.desc(), SectionOverride.id.desc())
            .limit(1)
        )
        row = self.session.execute(stmt).scalar_one_or_none()
        return _override_from_row(row) if row is not None else None


def _audit_from_row(row: AuditEvent) -> AuditEventItem:
    item = AuditEventItem.model_validate(row)
    return item.model_copy(update={"timestamp": _as_utc(item.timestamp)})


class SqlAuditRepository:
    def __init__(self, session: Session):
        self.session = session

    def latest(self) -> AuditEventItem | None:
        # Advisory lock serializes hash chain computation across concurrent
        # writers; released when the transaction commits or rolls back.
        if self.session.get_bind().dialect.name == "postgresql":
            self.session.execute(text(f"SELECT pg_advisory_xact_lock({AUDIT_LOCK_KEY})"))
        stmt = select(AuditEvent).order_by(AuditEvent.id.desc()).limit(1)
        row = self.session.execute(stmt).scalar_one_or_none()
        return _audit_from_row(row) if row is not None else None

    def append(self, event: AuditEventItem) -> AuditEventItem:
        row = AuditEvent(**event.model_dump(exclude={"id"}))
        self.session.add(row)
        self.session.flush()
        return event.model_copy(update={"id": row.id})

    def list_all(self) -> list[AuditEventItem]:
        stmt = select(AuditEvent).order_by(AuditEvent.id.asc())
        return [_audit_from_row(r) for r in self.session.execute(stmt).scalars().all()]

    def list_for_application(self, application_id: str) -> list[AuditEventItem]:
        stmt = (
            select(AuditEvent)
            .where(AuditEvent.application_id == application_id)
            .order_by(AuditEvent.id.asc())
        )
        return [_audit_from_row(r) for r in self.session.execute(stmt).scalars().all()]
