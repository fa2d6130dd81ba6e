# This project was developed with assistance from AI tools.
"""Tests for the completeness evaluator."""

from datetime import timedelta

import pytest
from db.enums import SectionStatus, TransactionType

from src.core.errors import ConfigurationError, ValidationError
from src.services.completeness import (
    CompletenessEvaluator,
    active_overrides,
    completion_percentage,
    evaluate,
    required_sections,
)

from .factories import (
    BASE_KEYS,
    T0,
    make_application,
    make_lease_application,
    make_override,
)

PURCHASES = [TransactionType.COOP_PURCHASE, TransactionType.CONDO_PURCHASE]
LEASES = [TransactionType.CONDO_LEASE, TransactionType.COOP_SUBLET]

# ---------------------------------------------------------------------------
# Required section set
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("tx", PURCHASES)
def test_purchase_excludes_disclosures(tx):
    """Purchases never require disclosures."""
    assert "disclosures" not in required_sections(tx)
    assert required_sections(tx) == BASE_KEYS


@pytest.mark.parametrize("tx", LEASES)
def test_lease_and_sublet_include_disclosures(tx):
    assert required_sections(tx) == BASE_KEYS + ("disclosures",)


@pytest.mark.parametrize("disclosures_complete", [True, False])
@pytest.mark.parametrize("tx", PURCHASES)
def test_purchase_ignores_disclosures_section_entry(tx, disclosures_complete):
    """An existing disclosures section affects neither numerator nor denominator."""
    complete = BASE_KEYS + (("disclosures",) if disclosures_complete else ())
    app = make_application(
        transaction_type=tx,
        complete=complete,
        keys=BASE_KEYS + ("disclosures",),
    )
    report = evaluate(app)
    assert report.total_count == 4
    assert report.completed_count == 4
    assert [s.key for s in report.per_section] == list(BASE_KEYS)


def test_required_sections_accepts_raw_string():
    assert "disclosures" in required_sections("COOP_SUBLET")


def test_unknown_transaction_type_raises_configuration_error():
    app = make_application(transaction_type="RENTAL")
    with pytest.raises(ConfigurationError, match="RENTAL"):
        evaluate(app)


def test_application_without_sections_is_rejected():
    app = make_application(keys=())
    with pytest.raises(ValidationError):
        evaluate(app)


# ---------------------------------------------------------------------------
# Percentage arithmetic
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("completed", "total", "expected"),
    [
        (0, 4, 0),
        (3, 4, 75),
        (4, 4, 100),
        (4, 5, 80),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),  # 12.5 rounds half-up
        (0, 0, 0),
    ],
)
def test_completion_percentage(completed, total, expected):
    assert completion_percentage(completed, total) == expected


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


def test_scenario_a_all_base_sections_complete():
    report = evaluate(make_application(transaction_type=TransactionType.COOP_PURCHASE))
    assert report.completion_percentage == 100
    assert report.can_submit is True
    assert all(s.status == SectionStatus.COMPLETE for s in report.per_section)


def test_scenario_b_documents_incomplete():
    app = make_application(complete=("profile", "income", "financials"))
    report = evaluate(app)
    assert report.completed_count == 3
    assert report.total_count == 4
    assert report.completion_percentage == 75
    assert report.can_submit is False
    assert report.missing_sections == ["documents"]


def test_scenario_c_override_satisfies_documents():
    app = make_application(complete=("profile", "income", "financials"))
    report = evaluate(app, [make_override("documents", reason="Verified via email")])
    assert report.completed_count == 4
    assert report.total_count == 4
    assert report.completion_percentage == 100
    assert report.can_submit is True

    documents = next(s for s in report.per_section if s.key == "documents")
    assert documents.satisfied is True
    assert documents.overridden is True
    assert documents.status == SectionStatus.OVERRIDDEN
    assert documents.override.reason == "Verified via email"


def test_scenario_d_lease_with_unacknowledged_disclosures():
    report = evaluate(make_lease_application())
    assert report.total_count == 5
    assert report.completed_count == 4
    assert report.completion_percentage == 80
    assert report.can_submit is False
    assert report.missing_sections == ["disclosures"]


# ---------------------------------------------------------------------------
# Overrides
# ---------------------------------------------------------------------------


def test_override_for_unknown_section_is_inert():
    app = make_application(complete=("profile", "income", "financials"))
    report = evaluate(app, [make_override("cover-letter")])
    assert report.completed_count == 3
    assert report.can_submit is False


def test_override_for_other_application_is_inert():
    app = make_application(complete=("profile", "income", "financials"))
    report = evaluate(app, [make_override("documents", app_id="someone-else")])
    assert report.completed_count == 3


def test_override_on_complete_section_counts_once():
    report = evaluate(make_application(), [make_override("documents")])
    assert report.completed_count == 4
    documents = next(s for s in report.per_section if s.key == "documents")
    assert documents.status == SectionStatus.COMPLETE
    assert documents.overridden is True


def test_missing_required_section_is_unsatisfied_with_default_label():
    app = make_application(keys=("profile", "income", "financials"), complete=("profile", "income", "financials"))
    report = evaluate(app)
    documents = next(s for s in report.per_section if s.key == "documents")
    assert documents.satisfied is False
    assert documents.label == "Documents uploaded"
    assert report.total_count == 4


def test_active_overrides_picks_most_recent():
    older = make_override("documents", reason="first", at=T0)
    newer = make_override("documents", reason="second", at=T0 + timedelta(hours=1))
    assert active_overrides("app-100", [newer, older])["documents"].reason == "second"


def test_active_overrides_tie_goes_to_later_entry():
    a = make_override("documents", reason="a", at=T0)
    b = make_override("documents", reason="b", at=T0)
    assert active_overrides("app-100", [a, b])["documents"].reason == "b"


# ---------------------------------------------------------------------------
# Warning policy
# ---------------------------------------------------------------------------


def test_financials_without_entries_is_a_warning():
    app = make_application(complete=("profile", "income", "documents"))
    report = evaluate(app)
    financials = next(s for s in report.per_section if s.key == "financials")
    assert financials.status == SectionStatus.WARNING
    assert report.can_submit is False


def test_allow_warning_sections_opens_the_gate_without_changing_the_count():
    app = make_application(complete=("profile", "income", "documents"))
    report = CompletenessEvaluator(allow_warning_sections=True).evaluate(app)
    assert report.can_submit is True
    assert report.completed_count == 3
    assert report.completion_percentage == 75


def test_allow_warning_sections_still_blocks_hard_gaps():
    app = make_application(complete=("profile", "documents"))
    report = CompletenessEvaluator(allow_warning_sections=True).evaluate(app)
    assert report.can_submit is False


# ---------------------------------------------------------------------------
# Purity
# ---------------------------------------------------------------------------


def test_evaluate_is_idempotent():
    app = make_lease_application(complete=("profile", "documents"))
    overrides = [make_override("income", app_id="app-200")]
    first = evaluate(app, overrides)
    second = evaluate(app, overrides)
    assert first == second
    assert first.model_dump_json() == second.model_dump_json()


def test_evaluate_does_not_mutate_inputs():
    app = make_application(complete=("profile",))
    before = app.model_dump()
    evaluate(app, [make_override("income")])
    assert app.model_dump() == before


@pytest.mark.parametrize("tx", PURCHASES + LEASES)
@pytest.mark.parametrize("n_complete", [0, 1, 2, 3, 4])
def test_percentage_matches_formula(tx, n_complete):
    keys = BASE_KEYS + ("disclosures",)
    app = make_application(transaction_type=tx, keys=keys, complete=keys[:n_complete])
    report = evaluate(app)
    assert 0 <= report.completion_percentage <= 100
    assert report.completion_percentage == round(100 * report.completed_count / report.total_count)
    assert report.can_submit == (report.completed_count == report.total_count)
