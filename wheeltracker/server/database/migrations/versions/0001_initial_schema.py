"""Create trades, positions, account settings and current prices

Revision ID: 0001
Revises:
Create Date: 2026-01-05 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _existing_tables() -> set[str]:
    return set(sa.inspect(op.get_bind()).get_table_names())


def upgrade() -> None:
    """Create the base tables, skipping any that already exist."""
    tables = _existing_tables()

    if 'trades' not in tables:
        op.create_table(
            'trades',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('ticker', sa.String(), nullable=False),
            sa.Column('option_type', sa.String(), nullable=False),
            sa.Column('strike', sa.Float(), nullable=False),
            sa.Column('expiration', sa.String(), nullable=False),
            sa.Column('premium', sa.Float(), nullable=False),
            sa.Column('quantity', sa.Integer(), nullable=False),
            sa.Column('open_date', sa.DateTime(), nullable=False),
            sa.Column('close_date', sa.DateTime(), nullable=True),
            sa.Column('close_premium', sa.Float(), nullable=True),
            sa.Column('status', sa.String(), nullable=False, server_default='OPEN'),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('position_id', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_trades_ticker', 'trades', ['ticker'])
        op.create_index('ix_trades_status', 'trades', ['status'])
        op.create_index('ix_trades_expiration', 'trades', ['expiration'])

    if 'positions' not in tables:
        op.create_table(
            'positions',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('ticker', sa.String(), nullable=False),
            sa.Column('shares', sa.Integer(), nullable=False),
            sa.Column('cost_basis', sa.Float(), nullable=False),
            sa.Column('acquired_date', sa.String(), nullable=False),
            sa.Column('acquisition_type', sa.String(), nullable=False),
            sa.Column('status', sa.String(), nullable=False, server_default='OPEN'),
            sa.Column('sold_date', sa.String(), nullable=True),
            sa.Column('sold_price', sa.Float(), nullable=True),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_positions_ticker', 'positions', ['ticker'])
        op.create_index('ix_positions_status', 'positions', ['status'])

    if 'account_settings' not in tables:
        op.create_table(
            'account_settings',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('total_capital', sa.Float(), nullable=False, server_default='0'),
            sa.Column('cash_available', sa.Float(), nullable=False, server_default='0'),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )

    if 'current_prices' not in tables:
        op.create_table(
            'current_prices',
            sa.Column('ticker', sa.String(), nullable=False),
            sa.Column('stock_price', sa.Float(), nullable=True),
            sa.Column('option_price', sa.Float(), nullable=True),
            sa.Column('strike', sa.Float(), nullable=True),
            sa.Column('expiration', sa.String(), nullable=True),
            sa.Column('option_type', sa.String(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('ticker'),
        )

    # The account settings row exists from initialization onward
    op.execute(
        "INSERT OR IGNORE INTO account_settings "
        "(id, total_capital, cash_available, updated_at) "
        "VALUES ('default', 0, 0, CURRENT_TIMESTAMP)"
    )


def downgrade() -> None:
    """Drop the base tables."""
    op.drop_table('current_prices')
    op.drop_table('account_settings')
    op.drop_table('positions')
    op.drop_table('trades')
