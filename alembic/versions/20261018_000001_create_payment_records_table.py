"""Create payment_records table

Revision ID: 20261018_000001
Revises:
Create Date: 2026-10-18

Append-only payment history, one row per record, keyed by (sender, position).
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261018_000001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "payment_records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sender", sa.LargeBinary(32), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("recipient", sa.LargeBinary(32), nullable=False),
        sa.Column("amount", sa.String(39), nullable=False),
        sa.Column("timestamp", sa.BigInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("sender", "position", name="uq_payment_records_sender_position"),
    )
    op.create_index("ix_payment_records_sender", "payment_records", ["sender"])


def downgrade() -> None:
    op.drop_index("ix_payment_records_sender", table_name="payment_records")
    op.drop_table("payment_records")
