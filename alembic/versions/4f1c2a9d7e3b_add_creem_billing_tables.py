"""add_creem_billing_tables

Revision ID: 4f1c2a9d7e3b
Revises:
Create Date: 2026-10-19 10:12:44.318204

Adds billing state kept in sync with Creem webhooks.

Tables:
- subscription_plans: Plans sold through Creem products
- user_subscriptions: Per-user subscription status and billing cycle
- credit_usage: Per-user credit allotment for the current period
- payment_history: One row per Creem payment
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1c2a9d7e3b'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Add billing tables with indexes."""

    op.create_table(
        'subscription_plans',
        sa.Column('id', sa.BigInteger(), nullable=False, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),

        # Pricing
        sa.Column('price', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('currency', sa.String(10), nullable=False, server_default='USD'),
        sa.Column('interval', sa.String(20), nullable=False),
        sa.Column('credit', sa.Integer(), nullable=False, server_default='0'),

        sa.Column('creem_product_id', sa.String(255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),

        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_subscription_plans_creem_product_id', 'subscription_plans', ['creem_product_id'], unique=True)

    op.create_table(
        'user_subscriptions',
        sa.Column('id', sa.BigInteger(), nullable=False, autoincrement=True),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column('subscription_plan_id', sa.BigInteger(), nullable=False),
        sa.Column('status', sa.String(50), nullable=False),

        # Billing cycle dates
        sa.Column('current_period_start', sa.DateTime(timezone=True), nullable=False),
        sa.Column('current_period_end', sa.DateTime(timezone=True), nullable=False),

        # External platform IDs
        sa.Column('creem_subscription_id', sa.String(255), nullable=True),
        sa.Column('creem_customer_id', sa.String(255), nullable=True),

        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_subscriptions_user_id', 'user_subscriptions', ['user_id'])
    op.create_index('ix_user_subscriptions_status', 'user_subscriptions', ['status'])
    op.create_index('ix_user_subscriptions_creem_subscription_id', 'user_subscriptions', ['creem_subscription_id'])
    op.create_index('idx_user_subscription_user_status', 'user_subscriptions', ['user_id', 'status'])
    op.create_index('idx_user_subscription_period_end', 'user_subscriptions', ['current_period_end'])

    op.create_table(
        'credit_usage',
        sa.Column('id', sa.BigInteger(), nullable=False, autoincrement=True),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column('credit_used', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('credit_total', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('period_start', sa.DateTime(timezone=True), nullable=False),
        sa.Column('period_end', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_credit_usage_user_id', 'credit_usage', ['user_id'], unique=True)
    op.create_index('idx_credit_usage_period_end', 'credit_usage', ['period_end'])

    op.create_table(
        'payment_history',
        sa.Column('id', sa.BigInteger(), nullable=False, autoincrement=True),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column('subscription_plan_id', sa.BigInteger(), nullable=True),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('currency', sa.String(10), nullable=True),
        sa.Column('interval', sa.String(20), nullable=True),
        sa.Column('status', sa.String(50), nullable=False),

        # External platform IDs
        sa.Column('creem_payment_intent_id', sa.String(255), nullable=True),
        sa.Column('creem_product_id', sa.String(255), nullable=True),
        sa.Column('creem_subscription_id', sa.String(255), nullable=True),
        sa.Column('creem_customer_id', sa.String(255), nullable=True),

        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_payment_history_user_id', 'payment_history', ['user_id'])
    op.create_index('ix_payment_history_status', 'payment_history', ['status'])
    op.create_index('ix_payment_history_creem_payment_intent_id', 'payment_history', ['creem_payment_intent_id'])
    op.create_index('ix_payment_history_creem_subscription_id', 'payment_history', ['creem_subscription_id'])
    op.create_index('idx_payment_history_user_status', 'payment_history', ['user_id', 'status'])


def downgrade() -> None:
    """Drop billing tables."""
    op.drop_table('payment_history')
    op.drop_table('credit_usage')
    op.drop_table('user_subscriptions')
    op.drop_table('subscription_plans')
