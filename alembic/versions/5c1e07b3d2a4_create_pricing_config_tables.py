"""Create pricing configuration tables

Revision ID: 5c1e07b3d2a4
Revises:
Create Date: 2026-10-19 10:02:11.418230

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "5c1e07b3d2a4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "rate_tables",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("store_ids", postgresql.ARRAY(sa.String(length=50)), nullable=False),
        sa.Column("max_installments", sa.Integer(), nullable=False),
        sa.Column("debit_rate", sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column("accepts_debit", sa.Boolean(), nullable=False),
        sa.Column("accepts_credit", sa.Boolean(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_rate_tables_store_ids", "rate_tables", ["store_ids"], postgresql_using="gin"
    )

    op.create_table(
        "installment_rates",
        sa.Column("rate_table_id", sa.String(length=64), nullable=False),
        sa.Column("installments", sa.Integer(), nullable=False),
        sa.Column("fee_percent", sa.Numeric(precision=5, scale=2), nullable=False),
        sa.ForeignKeyConstraint(["rate_table_id"], ["rate_tables.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("rate_table_id", "installments"),
    )

    op.create_table(
        "product_prices",
        sa.Column("product_id", sa.String(length=64), nullable=False),
        sa.Column("store_id", sa.String(length=50), nullable=False),
        sa.Column("price_cents", sa.BigInteger(), nullable=False),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.PrimaryKeyConstraint("product_id", "store_id"),
    )

    op.create_table(
        "trade_in_ranges",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("device_model_id", sa.String(length=64), nullable=False),
        sa.Column("store_id", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("min_value_cents", sa.BigInteger(), nullable=False),
        sa.Column("max_value_cents", sa.BigInteger(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("device_model_id", "store_id"),
    )

    op.create_table(
        "damage_deductions",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("discount_cents", sa.BigInteger(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("damage_deductions")
    op.drop_table("trade_in_ranges")
    op.drop_table("product_prices")
    op.drop_table("installment_rates")
    op.drop_index("ix_rate_tables_store_ids", table_name="rate_tables")
    op.drop_table("rate_tables")
