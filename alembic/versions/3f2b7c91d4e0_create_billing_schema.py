"""create_billing_schema

Revision ID: 3f2b7c91d4e0
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2b7c91d4e0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column('created_user', sa.Uuid(), nullable=False),
        sa.Column('created_timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_user', sa.Uuid(), nullable=True),
        sa.Column('updated_timestamp', sa.DateTime(timezone=True), nullable=True),
        sa.Column('disabled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('disabled_user', sa.Uuid(), nullable=True),
        sa.Column('disabled_timestamp', sa.DateTime(timezone=True), nullable=True),
    ]


def _membership_columns() -> list[sa.Column]:
    return [
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('created_user', sa.Uuid(), nullable=False),
        sa.Column('created_timestamp', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """
    Create the billing schema.

    Creates:
    - tenants, accounts
    - application_users, tenant_users, account_users (membership grants)
    - bill_schedules, bills
    """
    # 1. Tenants and accounts
    op.create_table(
        'tenants',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'accounts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False),
        sa.Column('reference_id', sa.String(length=255), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_accounts_tenant_id', 'accounts', ['tenant_id'])

    # 2. Membership grants
    op.create_table(
        'application_users',
        sa.Column('id', sa.Uuid(), nullable=False),
        *_membership_columns(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_application_users_user_id', 'application_users', ['user_id'], unique=True)

    op.create_table(
        'tenant_users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        *_membership_columns(),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tenant_id', 'user_id', name='uq_tenant_user')
    )
    op.create_index('ix_tenant_users_tenant_id', 'tenant_users', ['tenant_id'])
    op.create_index('ix_tenant_users_user_id', 'tenant_users', ['user_id'])

    op.create_table(
        'account_users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('account_id', sa.Uuid(), nullable=False),
        *_membership_columns(),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('account_id', 'user_id', name='uq_account_user')
    )
    op.create_index('ix_account_users_account_id', 'account_users', ['account_id'])
    op.create_index('ix_account_users_user_id', 'account_users', ['user_id'])

    # 3. Schedules and bills
    op.create_table(
        'bill_schedules',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('account_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('day_due', sa.Integer(), nullable=False),
        sa.Column('month_interval', sa.Integer(), nullable=False),
        sa.Column('begin_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('enabled', sa.Boolean(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('amount >= 0', name='ck_bill_schedules_amount_non_negative'),
        sa.CheckConstraint('day_due BETWEEN 1 AND 31', name='ck_bill_schedules_day_due_range'),
        sa.CheckConstraint('month_interval >= 1', name='ck_bill_schedules_month_interval_positive')
    )
    op.create_index('ix_bill_schedules_account_id', 'bill_schedules', ['account_id'])

    op.create_table(
        'bills',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('account_id', sa.Uuid(), nullable=False),
        sa.Column('bill_schedule_id', sa.Uuid(), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('payment_id', sa.String(length=255), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['bill_schedule_id'], ['bill_schedules.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        # Backstop against two overlapping generation runs billing the same cycle
        sa.UniqueConstraint('bill_schedule_id', 'due_date', name='uq_bill_schedule_due_date')
    )
    op.create_index('ix_bills_account_id', 'bills', ['account_id'])
    op.create_index('ix_bills_bill_schedule_id', 'bills', ['bill_schedule_id'])
    op.create_index('ix_bills_due_date', 'bills', ['due_date'])
    op.create_index('ix_bills_account_due_date', 'bills', ['account_id', 'due_date'])


def downgrade() -> None:
    """
    Drop the billing schema.

    WARNING: This deletes all tenants, accounts, memberships, schedules and bills.
    """
    op.drop_table('bills')
    op.drop_table('bill_schedules')
    op.drop_table('account_users')
    op.drop_table('tenant_users')
    op.drop_table('application_users')
    op.drop_table('accounts')
    op.drop_table('tenants')
