"""seed one identifier counter per student category

Revision ID: 20260301_seed_counters
Revises: 20260301_initial_schema
Create Date: 2026-03-01 00:10:00
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '20260301_seed_counters'
down_revision: Union[str, Sequence[str], None] = '20260301_initial_schema'
branch_labels = None
depends_on = None

COUNTERS = [("ST00A", "anglo"), ("ST00F", "franco"), ("ST00B", "bilingue")]

def upgrade() -> None:
    conn = op.get_bind()
    for prefix, category in COUNTERS:
        conn.execute(
            sa.text(
                "INSERT INTO student_id_counters (prefix, category, last_value) "
                "SELECT :prefix, :category, 0 WHERE NOT EXISTS "
                "(SELECT 1 FROM student_id_counters WHERE prefix=:prefix)"
            ),
            {"prefix": prefix, "category": category},
        )

def downgrade() -> None:
    conn = op.get_bind()
    for prefix, _ in COUNTERS:
        conn.execute(sa.text("DELETE FROM student_id_counters WHERE prefix=:prefix"), {"prefix": prefix})
