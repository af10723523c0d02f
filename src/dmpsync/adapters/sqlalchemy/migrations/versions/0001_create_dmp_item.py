"""Create the dmp_item table.

Revision ID: 0001_create_dmp_item
Revises:
Create Date: 2026-10-19 00:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_create_dmp_item"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "dmp_item",
        sa.Column("pk", sa.String(length=255), nullable=False),
        sa.Column("sk", sa.String(length=255), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("modified_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("pk", "sk", name=op.f("pk_dmp_item")),
    )


def downgrade() -> None:
    op.drop_table("dmp_item")
