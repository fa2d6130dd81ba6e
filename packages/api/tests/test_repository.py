# This project was developed with assistance from AI tools.
"""Tests for the SQLAlchemy repositories against an in-memory SQLite database."""

from datetime import timedelta

import pytest
from db import Base
from db.enums import ApplicationStatus, DocumentCategory, PersonRole
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from src.services.audit import GENESIS_HASH, verify_audit_chain, write_audit_event
from src.services.completeness import evaluate
from src.services.overrides import OverrideLedger
from src.services.repository import (
    SqlApplicationRepository,
    SqlAuditRepository,
    SqlOverrideRepository,
)

from .factories import T0, StepClock, make_application, make_complete_data, make_override


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as s:
        yield s
    engine.dispose()


def test_application_round_trip(session):
    repo = SqlApplicationRepository(session)
    repo.add(make_application(complete=("profile", "income"), **make_complete_data()))
    session.commit()

    app = repo.get("app-100")
    assert app.transaction_type == "COOP_PURCHASE"
    assert app.status == ApplicationStatus.IN_PROGRESS
    assert [s.key for s in app.sections] == ["profile", "income", "financials", "documents"]
    assert [s.is_complete for s in app.sections] == [True, True, False, False]
    assert app.people[0].role == PersonRole.APPLICANT
    assert app.people[0].address_history == []
    assert app.documents[0].category == DocumentCategory.GOVERNMENT_ID
    assert evaluate(app).completion_percentage == 50


def test_get_unknown_application(session):
    assert SqlApplicationRepository(session).get("missing") is None


def test_save_sections_and_mark_submitted(session):
    repo = SqlApplicationRepository(session)
    original = repo.add(make_application(complete=()))
    flipped = [s.model_copy(update={"is_complete": True}) for s in original.sections]

    repo.save_sections("app-100", flipped, 100)
    repo.mark_submitted(
        "app-100", status=ApplicationStatus.SUBMITTED, submitted_at=T0, completion_percentage=100
    )
    session.commit()

    app = repo.get("app-100")
    assert all(s.is_complete for s in app.sections)
    assert app.status == ApplicationStatus.SUBMITTED
    assert app.is_locked is True
    assert app.completion_percentage == 100


def test_override_history_ordered_and_latest(session):
    repo = SqlOverrideRepository(session)
    repo.append(make_override("documents", reason="second", at=T0 + timedelta(hours=1)))
    repo.append(make_override("documents", reason="first", at=T0))
    repo.append(make_override("income", reason="other", at=T0 + timedelta(minutes=5)))
    repo.append(make_override("documents", app_id="app-200", at=T0 + timedelta(days=1)))
    session.commit()

    history = repo.list_for_application("app-100")
    assert [o.reason for o in history] == ["first", "other", "second"]
    assert history[0].overridden_at == T0
    assert repo.latest_for_section("app-100", "documents").reason == "second"
    assert repo.latest_for_section("app-100", "profile") is None


def test_audit_chain_survives_round_trip(session):
    repo = SqlAuditRepository(session)
    first = write_audit_event(
        repo, action="MANUAL_OVERRIDE", timestamp=T0, application_id="app-100",
        section="documents", reason="Verified via email", event_data={"section_label": "Documents"},
    )
    write_audit_event(
        repo, action="APPLICATION_SUBMITTED", timestamp=T0 + timedelta(minutes=1),
        application_id="app-100", previous_status="IN_PROGRESS", new_status="SUBMITTED",
    )
    session.commit()

    events = repo.list_all()
    assert first.id == events[0].id
    assert events[0].prev_hash == GENESIS_HASH
    assert events[0].timestamp == T0
    assert verify_audit_chain(events) == {"status": "OK", "events_checked": 2}
    assert len(repo.list_for_application("app-100")) == 2
    assert repo.list_for_application("app-200") == []


def test_ledger_on_sql_repositories(session):
    SqlApplicationRepository(session).add(make_application(complete=("profile", "income", "financials")))
    ledger = OverrideLedger(SqlOverrideRepository(session), SqlAuditRepository(session), clock=StepClock())
    ledger.record_override("app-100", "documents", "Documents", "broker@example.com", "Verified via email")
    session.commit()

    app = SqlApplicationRepository(session).get("app-100")
    report = evaluate(app, ledger.list_overrides("app-100"))
    assert report.can_submit is True
    events = SqlAuditRepository(session).list_all()
    assert [e.action for e in events] == ["MANUAL_OVERRIDE"]
    assert events[0].reason == "Verified via email"
