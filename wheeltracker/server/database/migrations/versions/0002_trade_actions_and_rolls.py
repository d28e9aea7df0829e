"""Add trade action, close method and roll linkage columns

Revision ID: 0002
Revises: 0001
Create Date: 2026-02-09 18:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0002'
down_revision: Union[str, Sequence[str], None] = '0001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _new_columns() -> list[sa.Column]:
    return [
        sa.Column('action', sa.String(), nullable=False, server_default='SELL_TO_OPEN'),
        sa.Column('close_method', sa.String(), nullable=True),
        sa.Column('rolled_to_trade_id', sa.String(), nullable=True),
        sa.Column('rolled_from_trade_id', sa.String(), nullable=True),
    ]


def _trade_columns() -> set[str]:
    inspector = sa.inspect(op.get_bind())
    return {column['name'] for column in inspector.get_columns('trades')}


def upgrade() -> None:
    """Add the columns that are missing; existing rows get SELL_TO_OPEN."""
    existing = _trade_columns()

    for column in _new_columns():
        if column.name not in existing:
            op.add_column('trades', column)

    op.execute("UPDATE trades SET action = 'SELL_TO_OPEN' WHERE action IS NULL")


def downgrade() -> None:
    """Remove the action and roll linkage columns."""
    existing = _trade_columns()
    with op.batch_alter_table('trades') as batch_op:
        for column in reversed(_new_columns()):
            if column.name in existing:
                batch_op.drop_column(column.name)
