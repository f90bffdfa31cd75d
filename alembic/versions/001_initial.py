"""Initial schema: funds and daily_data

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('funds',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('fund_code', sa.String(length=20), nullable=False),
        sa.Column('fund_name', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('cost', sa.Numeric(precision=10, scale=4), nullable=False, server_default='0'),
        sa.Column('shares', sa.Numeric(precision=12, scale=4), nullable=False, server_default='0'),
        sa.Column('note', sa.String(length=200), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_funds_fund_code', 'funds', ['fund_code'])

    op.create_table('daily_data',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('fund_code', sa.String(length=20), nullable=False),
        sa.Column('nav', sa.Numeric(precision=8, scale=4), nullable=False, server_default='0'),
        sa.Column('daily_change', sa.Numeric(precision=8, scale=4), nullable=False, server_default='0'),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('fund_code', 'date', name='uq_daily_data_fund_date')
    )
    op.create_index('ix_daily_data_lookup', 'daily_data', ['fund_code', 'date'])


def downgrade():
    op.drop_index('ix_daily_data_lookup', table_name='daily_data')
    op.drop_table('daily_data')
    op.drop_index('ix_funds_fund_code', table_name='funds')
    op.drop_table('funds')
