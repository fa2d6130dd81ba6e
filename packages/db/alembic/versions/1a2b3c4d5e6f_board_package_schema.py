# This project was developed with assistance from AI tools.
"""board package schema

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-03-02 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

revision = "1a2b3c4d5e6f"
down_revision = None
branch_labels = None
depends_on = None

_CHILD_TABLES = (
    "application_sections",
    "people",
    "employment_records",
    "financial_entries",
    "real_estate_properties",
    "documents",
    "disclosures",
    "participants",
)


def _application_fk() -> sa.Column:
    return sa.Column(
        "application_id",
        sa.String(36),
        sa.ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "applications",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("building_id", sa.String(36), nullable=True),
        sa.Column("unit", sa.String(50), nullable=True),
        sa.Column("transaction_type", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="IN_PROGRESS"),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("cover_letter", sa.Text(), nullable=True),
        sa.Column("is_locked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("completion_percentage", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "completion_percentage BETWEEN 0 AND 100", name="ck_applications_completion_pct"
        ),
    )
    op.create_index("ix_applications_building_id", "applications", ["building_id"])
    op.create_index("ix_applications_created_by", "applications", ["created_by"])

    op.create_table(
        "application_sections",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _application_fk(),
        sa.Column("key", sa.String(50), nullable=False),
        sa.Column("label", sa.String(255), nullable=False),
        sa.Column("is_complete", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("application_id", "key", name="uq_app_section_key"),
    )

    op.create_table(
        "people",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _application_fk(),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("date_of_birth", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ssn_full", sa.String(255), nullable=True),
        sa.Column("ssn_last4", sa.String(4), nullable=True),
        sa.Column("address_history", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "employment_records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _application_fk(),
        sa.Column("employer", sa.String(255), nullable=False),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("employment_status", sa.String(20), nullable=True),
        sa.Column("annual_income", sa.Numeric(14, 2), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "financial_entries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _application_fk(),
        sa.Column("entry_type", sa.String(20), nullable=False),
        sa.Column("category", sa.String(50), nullable=True),
        sa.Column("institution", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "real_estate_properties",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _application_fk(),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("property_type", sa.String(50), nullable=True),
        sa.Column("market_value", sa.Numeric(14, 2), nullable=True),
        sa.Column("mortgage_balance", sa.Numeric(14, 2), nullable=True),
        sa.Column("monthly_income", sa.Numeric(12, 2), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _application_fk(),
        sa.Column("category", sa.String(30), nullable=False),
        sa.Column("filename", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "disclosures",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _application_fk(),
        sa.Column("disclosure_type", sa.String(100), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("acknowledged", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("acknowledged_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "participants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _application_fk(),
        sa.Column("role", sa.String(30), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("company", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    for table in _CHILD_TABLES:
        op.create_index(f"ix_{table}_application_id", table, ["application_id"])

    op.create_table(
        "section_overrides",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("application_id", sa.String(36), nullable=False),
        sa.Column("section_key", sa.String(50), nullable=False),
        sa.Column("section_label", sa.String(255), nullable=False),
        sa.Column("overridden_by", sa.String(255), nullable=False),
        sa.Column("overridden_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("length(trim(reason)) > 0", name="ck_section_overrides_reason"),
    )
    op.create_index("ix_section_overrides_application_id", "section_overrides", ["application_id"])
    op.create_index("ix_section_overrides_section_key", "section_overrides", ["section_key"])

    op.create_table(
        "audit_events",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("prev_hash", sa.String(64), nullable=True),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("application_id", sa.String(36), nullable=True),
        sa.Column("section", sa.String(50), nullable=True),
        sa.Column("performed_by", sa.String(255), nullable=True),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("previous_status", sa.String(50), nullable=True),
        sa.Column("new_status", sa.String(50), nullable=True),
        sa.Column("event_data", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_audit_events_action", "audit_events", ["action"])
    op.create_index("ix_audit_events_application_id", "audit_events", ["application_id"])


def downgrade() -> None:
    op.drop_table("audit_events")
    op.drop_table("section_overrides")
    for table in reversed(_CHILD_TABLES):
        op.drop_table(table)
    op.drop_table("applications")
