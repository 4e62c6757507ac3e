"""create_ledger_tables

Revision ID: 5c1e2a9b7d40
Revises:
Create Date: 2026-10-18 09:12:31.402118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '5c1e2a9b7d40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Users (balances and streak live on the user row)
    op.create_table('users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=True),
        sa.Column('hashed_password', sa.String(255), nullable=True),
        sa.Column('role', sa.Enum('ADMIN', 'USER', name='userrole'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('avatar_url', sa.String(500), nullable=True),
        sa.Column('diamonds', sa.Integer(), server_default='0', nullable=False),
        sa.Column('xp', sa.Integer(), server_default='0', nullable=False),
        sa.Column('consecutive_check_in_days', sa.Integer(), server_default='0', nullable=False),
        sa.Column('last_check_in_at', postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('streak_occurrence_id', sa.Integer(), server_default='0', nullable=False),
        sa.Column('creation_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('equipped_frame_id', sa.String(50), nullable=True),
        sa.Column('equipped_title_id', sa.String(50), nullable=True),
        sa.Column('created_at', postgresql.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', postgresql.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('deleted_at', postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.CheckConstraint('diamonds >= 0', name='users_diamonds_non_negative_check'),
        sa.CheckConstraint('xp >= 0', name='users_xp_non_negative_check'),
        sa.CheckConstraint('consecutive_check_in_days >= 0', name='users_streak_non_negative_check'),
        sa.PrimaryKeyConstraint('id', name='users_pkey'),
    )
    op.create_index('users_id_idx', 'users', ['id'])
    op.create_index('users_email_idx', 'users', ['email'], unique=True)
    op.create_index('users_username_idx', 'users', ['username'], unique=True)

    # Append-only ledger
    op.create_table('diamond_transactions_log',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Integer(), server_default='0', nullable=False),
        sa.Column('xp_amount', sa.Integer(), server_default='0', nullable=False),
        sa.Column('transaction_type', sa.String(50), nullable=False),
        sa.Column('description', sa.String(255), nullable=True),
        sa.Column('reference_key', sa.String(100), nullable=True),
        sa.Column('created_at', postgresql.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('amount <> 0 OR xp_amount <> 0', name='diamond_transactions_log_non_zero_delta_check'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='diamond_transactions_log_user_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='diamond_transactions_log_pkey'),
    )
    op.create_index('diamond_transactions_log_id_idx', 'diamond_transactions_log', ['id'])
    op.create_index(
        'diamond_transactions_log_user_type_created_idx',
        'diamond_transactions_log',
        ['user_id', 'transaction_type', 'created_at'],
    )
    op.create_index(
        'diamond_transactions_log_user_created_idx',
        'diamond_transactions_log',
        ['user_id', 'created_at'],
    )

    # Reward catalog
    op.create_table('check_in_rewards',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('consecutive_days', sa.Integer(), nullable=False),
        sa.Column('diamond_reward', sa.Integer(), nullable=False),
        sa.Column('xp_reward', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', postgresql.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', postgresql.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('deleted_at', postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.CheckConstraint('consecutive_days > 0', name='check_in_rewards_consecutive_days_positive_check'),
        sa.CheckConstraint('diamond_reward >= 0', name='check_in_rewards_diamond_reward_non_negative_check'),
        sa.CheckConstraint('xp_reward >= 0', name='check_in_rewards_xp_reward_non_negative_check'),
        sa.PrimaryKeyConstraint('id', name='check_in_rewards_pkey'),
    )
    op.create_index('check_in_rewards_id_idx', 'check_in_rewards', ['id'])
    op.create_index(
        'check_in_rewards_active_consecutive_days_key',
        'check_in_rewards',
        ['consecutive_days'],
        unique=True,
        postgresql_where=sa.text('is_active AND deleted_at IS NULL'),
    )

    # Default catalog: milestone bonuses shown in the check-in modal
    rewards = sa.table('check_in_rewards',
        sa.column('consecutive_days', sa.Integer()),
        sa.column('diamond_reward', sa.Integer()),
        sa.column('xp_reward', sa.Integer()),
        sa.column('is_active', sa.Boolean()),
    )
    op.bulk_insert(rewards, [
        {'consecutive_days': 1, 'diamond_reward': 5, 'xp_reward': 10, 'is_active': True},
        {'consecutive_days': 7, 'diamond_reward': 20, 'xp_reward': 50, 'is_active': True},
        {'consecutive_days': 14, 'diamond_reward': 50, 'xp_reward': 100, 'is_active': True},
        {'consecutive_days': 30, 'diamond_reward': 100, 'xp_reward': 200, 'is_active': True},
    ])

    # One row per user per local day
    op.create_table('daily_check_ins',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('check_in_date', sa.Date(), nullable=False),
        sa.Column('streak_day', sa.Integer(), nullable=False),
        sa.Column('diamonds_awarded', sa.Integer(), nullable=False),
        sa.Column('xp_awarded', sa.Integer(), nullable=False),
        sa.Column('created_at', postgresql.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='daily_check_ins_user_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='daily_check_ins_pkey'),
        sa.UniqueConstraint('user_id', 'check_in_date', name='uq_daily_check_in_user_date'),
    )
    op.create_index('daily_check_ins_id_idx', 'daily_check_ins', ['id'])
    op.create_index('daily_check_ins_user_id_idx', 'daily_check_ins', ['user_id'])
    op.create_index('daily_check_ins_check_in_date_idx', 'daily_check_ins', ['check_in_date'])

    # Milestone claims, keyed by streak occurrence
    op.create_table('milestone_claims',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('milestone_days', sa.Integer(), nullable=False),
        sa.Column('streak_occurrence_id', sa.Integer(), nullable=False),
        sa.Column('transaction_id', sa.Integer(), nullable=False),
        sa.Column('created_at', postgresql.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='milestone_claims_user_id_fkey'),
        sa.ForeignKeyConstraint(['transaction_id'], ['diamond_transactions_log.id'], name='milestone_claims_transaction_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='milestone_claims_pkey'),
        sa.UniqueConstraint(
            'user_id', 'milestone_days', 'streak_occurrence_id',
            name='uq_milestone_claim_user_days_occurrence',
        ),
    )
    op.create_index('milestone_claims_id_idx', 'milestone_claims', ['id'])
    op.create_index('milestone_claims_user_id_idx', 'milestone_claims', ['user_id'])

    # Bought cosmetics
    op.create_table('user_inventory',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.String(50), nullable=False),
        sa.Column('transaction_id', sa.Integer(), nullable=True),
        sa.Column('created_at', postgresql.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='user_inventory_user_id_fkey'),
        sa.ForeignKeyConstraint(['transaction_id'], ['diamond_transactions_log.id'], name='user_inventory_transaction_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='user_inventory_pkey'),
        sa.UniqueConstraint('user_id', 'item_id', name='uq_user_inventory_user_item'),
    )
    op.create_index('user_inventory_id_idx', 'user_inventory', ['id'])
    op.create_index('user_inventory_user_id_idx', 'user_inventory', ['user_id'])

    # Gift codes
    op.create_table('gift_codes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('diamond_reward', sa.Integer(), nullable=False),
        sa.Column('xp_reward', sa.Integer(), nullable=False),
        sa.Column('usage_limit', sa.Integer(), nullable=True),
        sa.Column('usage_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('max_per_user', sa.Integer(), server_default='1', nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('expires_at', postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('created_at', postgresql.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', postgresql.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.CheckConstraint('diamond_reward >= 0', name='gift_codes_gift_diamond_reward_non_negative_check'),
        sa.CheckConstraint('xp_reward >= 0', name='gift_codes_gift_xp_reward_non_negative_check'),
        sa.CheckConstraint('usage_count >= 0', name='gift_codes_usage_count_non_negative_check'),
        sa.CheckConstraint('max_per_user > 0', name='gift_codes_max_per_user_positive_check'),
        sa.PrimaryKeyConstraint('id', name='gift_codes_pkey'),
    )
    op.create_index('gift_codes_id_idx', 'gift_codes', ['id'])
    op.create_index('gift_codes_code_idx', 'gift_codes', ['code'], unique=True)

    op.create_table('gift_code_redemptions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('gift_code_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('redemption_number', sa.Integer(), nullable=False),
        sa.Column('transaction_id', sa.Integer(), nullable=True),
        sa.Column('created_at', postgresql.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['gift_code_id'], ['gift_codes.id'], name='gift_code_redemptions_gift_code_id_fkey'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='gift_code_redemptions_user_id_fkey'),
        sa.ForeignKeyConstraint(['transaction_id'], ['diamond_transactions_log.id'], name='gift_code_redemptions_transaction_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='gift_code_redemptions_pkey'),
        sa.UniqueConstraint(
            'gift_code_id', 'user_id', 'redemption_number',
            name='uq_gift_code_redemption_user_number',
        ),
    )
    op.create_index('gift_code_redemptions_id_idx', 'gift_code_redemptions', ['id'])
    op.create_index('gift_code_redemptions_gift_code_id_idx', 'gift_code_redemptions', ['gift_code_id'])
    op.create_index('gift_code_redemptions_user_id_idx', 'gift_code_redemptions', ['user_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('gift_code_redemptions')
    op.drop_table('gift_codes')
    op.drop_table('user_inventory')
    op.drop_table('milestone_claims')
    op.drop_table('daily_check_ins')
    op.drop_index('check_in_rewards_active_consecutive_days_key', table_name='check_in_rewards')
    op.drop_table('check_in_rewards')
    op.drop_table('diamond_transactions_log')
    op.drop_table('users')
    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
