# This project was developed with assistance from AI tools.
"""append-only triggers on audit_events and section_overrides

Revision ID: 2b3c4d5e6f7a
Revises: 1a2b3c4d5e6f
Create Date: 2026-03-02 09:30:00.000000
"""

from alembic import op

revision = "2b3c4d5e6f7a"
down_revision = "1a2b3c4d5e6f"
branch_labels = None
depends_on = None

APPEND_ONLY_TABLES = ("audit_events", "section_overrides")

TRIGGER_FUNCTION = """
CREATE OR REPLACE FUNCTION prevent_append_only_mutation()
RETURNS TRIGGER AS $$
BEGIN
    RAISE EXCEPTION '% is append-only: % denied for row %', TG_TABLE_NAME, TG_OP, OLD.id;
    RETURN NULL;
END;
$$ LANGUAGE plpgsql;
"""


def upgrade() -> None:
    op.execute(TRIGGER_FUNCTION)
    for table in APPEND_ONLY_TABLES:
        for operation in ("UPDATE", "DELETE"):
            op.execute(
                f"CREATE TRIGGER {table}_no_{operation.lower()} "
                f"BEFORE {operation} ON {table} "
                "FOR EACH ROW EXECUTE FUNCTION prevent_append_only_mutation();"
            )


def downgrade() -> None:
    for table in APPEND_ONLY_TABLES:
        for operation in ("UPDATE", "DELETE"):
            op.execute(f"DROP TRIGGER IF EXISTS {table}_no_{operation.lower()} ON {table}")
    op.execute("DROP FUNCTION IF EXISTS prevent_append_only_mutation()")
