"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create agents table
    op.create_table(
        'agents',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('agent_id', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('max_loan_amount', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('specializations', sa.String(length=500), nullable=True),
        sa.Column('manager_id', sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(['manager_id'], ['agents.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_agents_agent_id', 'agents', ['agent_id'], unique=True)
    op.create_index('ix_agents_email', 'agents', ['email'], unique=True)
    op.create_index('ix_agents_status', 'agents', ['status'])
    op.create_index('ix_agents_manager_id', 'agents', ['manager_id'])

    # Create loans table
    op.create_table(
        'loans',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('loan_id', sa.String(length=50), nullable=False),
        sa.Column('customer_name', sa.String(length=100), nullable=False),
        sa.Column('customer_phone', sa.String(length=20), nullable=False),
        sa.Column('loan_amount', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('loan_type', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=30), nullable=False),
        sa.Column('assigned_agent_id', sa.Uuid(), nullable=True),
        sa.Column('decision_reason', sa.String(length=500), nullable=True),
        sa.Column('processing_started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('processing_completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['assigned_agent_id'], ['agents.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_loans_loan_id', 'loans', ['loan_id'], unique=True)
    op.create_index('ix_loans_customer_name', 'loans', ['customer_name'])
    op.create_index('ix_loans_status', 'loans', ['status'])
    op.create_index('ix_loans_assigned_agent_id', 'loans', ['assigned_agent_id'])


def downgrade() -> None:
    op.drop_index('ix_loans_assigned_agent_id', table_name='loans')
    op.drop_index('ix_loans_status', table_name='loans')
    op.drop_index('ix_loans_customer_name', table_name='loans')
    op.drop_index('ix_loans_loan_id', table_name='loans')
    op.drop_table('loans')

    op.drop_index('ix_agents_manager_id', table_name='agents')
    op.drop_index('ix_agents_status', table_name='agents')
    op.drop_index('ix_agents_email', table_name='agents')
    op.drop_index('ix_agents_agent_id', table_name='agents')
    op.drop_table('agents')
