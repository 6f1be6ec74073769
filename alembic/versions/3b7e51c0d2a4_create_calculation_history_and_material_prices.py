"""create calculation_history and material_prices

Revision ID: 3b7e51c0d2a4
Revises:
Create Date: 2026-10-18 09:12:40.513208

Base schema. The app also calls Base.metadata.create_all() at import, so
each table is only created here when it is not there already.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b7e51c0d2a4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _table_exists(table_name):
    """Check if a table exists."""
    bind = op.get_bind()
    insp = sa.inspect(bind)
    return table_name in insp.get_table_names()


def upgrade() -> None:
    if not _table_exists("calculation_history"):
        op.create_table(
            "calculation_history",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("calculator_type", sa.String(), nullable=False),
            sa.Column("title", sa.String(), nullable=True),
            sa.Column("inputs_json", sa.JSON(), nullable=True),
            sa.Column("prices_json", sa.JSON(), nullable=True),
            sa.Column("normalized_json", sa.JSON(), nullable=True),
            sa.Column("results_json", sa.JSON(), nullable=True),
            sa.Column("costs_json", sa.JSON(), nullable=True),
            sa.Column("detail_json", sa.JSON(), nullable=True),
            sa.Column("generated_content", sa.JSON(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_calculation_history_calculator_type", "calculation_history", ["calculator_type"])
        op.create_index("ix_calculation_history_created_at", "calculation_history", ["created_at"])

    if not _table_exists("material_prices"):
        op.create_table(
            "material_prices",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("price_key", sa.String(), nullable=False),
            sa.Column("price", sa.Float(), nullable=False),
            sa.Column("unit", sa.String(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
            sa.Column("notes", sa.Text(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("price_key"),
        )
        op.create_index("ix_material_prices_id", "material_prices", ["id"])


def downgrade() -> None:
    op.drop_index("ix_material_prices_id", table_name="material_prices")
    op.drop_table("material_prices")
    op.drop_index("ix_calculation_history_created_at", table_name="calculation_history")
    op.drop_index("ix_calculation_history_calculator_type", table_name="calculation_history")
    op.drop_table("calculation_history")
