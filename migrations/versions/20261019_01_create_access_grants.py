"""create access grants table

Revision ID: 20261019_01
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "access_grants",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("invoice_id", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("consumed_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_access_grants_invoice_id", "access_grants", ["invoice_id"], unique=True)
    op.create_index("ix_access_grants_consumed_at", "access_grants", ["consumed_at"])


def downgrade() -> None:
    op.drop_index("ix_access_grants_consumed_at", table_name="access_grants")
    op.drop_index("ix_access_grants_invoice_id", table_name="access_grants")
    op.drop_table("access_grants")
