"""create_calendar_tables

Revision ID: 3f9c1d2e7a41
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c1d2e7a41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "calendar_days",
        sa.Column("day", sa.Date(), primary_key=True),
        sa.Column("cost", sa.Numeric(10, 2), nullable=True),
        sa.Column("available", sa.Boolean(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "pricing_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("default_cost", sa.Numeric(10, 2), nullable=True),
        sa.Column("cleaning_cost", sa.Numeric(10, 2), nullable=True),
        sa.Column("security_deposit", sa.Numeric(10, 2), nullable=True),
        sa.Column("discounts", sa.JSON(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )

    # Single settings row; per-date rows are sparse overrides
    op.execute("INSERT INTO pricing_settings (id) VALUES (1)")


def downgrade() -> None:
    op.drop_table("pricing_settings")
    op.drop_table("calendar_days")
