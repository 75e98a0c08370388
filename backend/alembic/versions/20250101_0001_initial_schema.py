"""Initial schema: users, loops, referrals and achievements.

Revision ID: 20250101_0001
Revises:
Create Date: 2025-01-01

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20250101_0001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('display_name', sa.String(64), nullable=True),
        sa.Column('role', sa.String(16), nullable=False, server_default='user'),
        sa.Column('referral_code', sa.String(16), nullable=True),
        sa.Column('total_spent', sa.Numeric(18, 6), nullable=False, server_default='0'),
        sa.Column('total_earnings', sa.Numeric(18, 6), nullable=False, server_default='0'),
        sa.Column('experience_points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('level', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('referral_code', name='uq_users_referral_code'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'loops',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(128), nullable=False),
        sa.Column('difficulty', sa.String(32), nullable=False),
        sa.Column('ticket_price', sa.Numeric(18, 6), nullable=False),
        sa.Column('max_tickets', sa.Integer(), nullable=False),
        sa.Column('prize_pool', sa.Numeric(18, 6), nullable=False, server_default='0'),
        sa.Column('status', sa.String(16), nullable=False, server_default='active'),
        sa.Column('winner_address', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_loops_winner_address', 'loops', ['winner_address'])

    op.create_table(
        'loop_entries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('loop_id', sa.Integer(), sa.ForeignKey('loops.id', ondelete='CASCADE'), nullable=False),
        sa.Column('wallet_address', sa.String(64), nullable=False),
        sa.Column('ticket_number', sa.Integer(), nullable=False),
        sa.Column('amount_paid', sa.Numeric(18, 6), nullable=False),
        sa.Column('transaction_id', sa.String(128), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_loop_entries_loop_id', 'loop_entries', ['loop_id'])
    op.create_index('ix_loop_entries_wallet_address', 'loop_entries', ['wallet_address'])

    op.create_table(
        'referral_stats',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('total_referrals', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_commission_earned', sa.Numeric(18, 6), nullable=False, server_default='0'),
        sa.Column('current_tier', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('this_month_referrals', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'achievements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(128), nullable=False),
        sa.Column('description', sa.String(512), nullable=False, server_default=''),
        sa.Column('icon', sa.String(64), nullable=False, server_default='trophy'),
        sa.Column('category', sa.String(16), nullable=False),
        sa.Column('rarity', sa.String(16), nullable=False, server_default='common'),
        sa.Column('reward_points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('unlock_criteria', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_achievements_is_active', 'achievements', ['is_active'])

    op.create_table(
        'user_achievement_progress',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('achievement_id', sa.Integer(), sa.ForeignKey('achievements.id', ondelete='CASCADE'), nullable=False),
        sa.Column('progress', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('target', sa.Integer(), nullable=False),
        sa.Column('unlocked_at', sa.DateTime(), nullable=True),
        sa.Column('is_claimed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('user_id', 'achievement_id', name='uq_user_achievement_progress'),
    )
    op.create_index('ix_user_achievement_progress_user_id', 'user_achievement_progress', ['user_id'])
    op.create_index('ix_user_achievement_progress_achievement_id', 'user_achievement_progress', ['achievement_id'])


def downgrade():
    op.drop_index('ix_user_achievement_progress_achievement_id')
    op.drop_index('ix_user_achievement_progress_user_id')
    op.drop_table('user_achievement_progress')
    op.drop_index('ix_achievements_is_active')
    op.drop_table('achievements')
    op.drop_table('referral_stats')
    op.drop_index('ix_loop_entries_wallet_address')
    op.drop_index('ix_loop_entries_loop_id')
    op.drop_table('loop_entries')
    op.drop_index('ix_loops_winner_address')
    op.drop_table('loops')
    op.drop_index('ix_users_email')
    op.drop_table('users')
