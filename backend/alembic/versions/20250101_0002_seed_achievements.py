"""Seed default achievements

Revision ID: 20250101_0002
Revises: 20250101_0001
Create Date: 2025-01-01

"""
from alembic import op
from sqlalchemy.sql import table, column
from sqlalchemy import Integer, JSON, String


# revision identifiers, used by Alembic.
revision = '20250101_0002'
down_revision = '20250101_0001'
branch_labels = None
depends_on = None


# Achievement definitions
ACHIEVEMENTS = [
    # Gameplay
    {
        "name": "First Entry",
        "description": "Enter your first loop",
        "icon": "ticket",
        "category": "gameplay",
        "rarity": "common",
        "reward_points": 100,
        "unlock_criteria": {"type": "loop_entries", "target": 1},
    },
    {
        "name": "Loop Veteran",
        "description": "Enter 25 loops",
        "icon": "repeat",
        "category": "gameplay",
        "rarity": "rare",
        "reward_points": 500,
        "unlock_criteria": {"type": "loop_entries", "target": 25},
    },
    {
        "name": "First Win",
        "description": "Win a loop",
        "icon": "crown",
        "category": "gameplay",
        "rarity": "epic",
        "reward_points": 1000,
        "unlock_criteria": {"type": "loop_wins", "target": 1},
    },
    # Social
    {
        "name": "Recruiter",
        "description": "Refer 5 friends",
        "icon": "users",
        "category": "social",
        "rarity": "rare",
        "reward_points": 500,
        "unlock_criteria": {"type": "referrals", "target": 5},
    },
    # Milestones
    {
        "name": "High Roller",
        "description": "Spend 1000 in total",
        "icon": "coins",
        "category": "milestone",
        "rarity": "epic",
        "reward_points": 750,
        "unlock_criteria": {"type": "total_spent", "target": 1000},
    },
    # Special
    {
        "name": "Early Adopter",
        "description": "Join during the beta",
        "icon": "star",
        "category": "special",
        "rarity": "legendary",
        "reward_points": 250,
        "unlock_criteria": {"type": "early_user", "target": 1},
    },
]


def upgrade():
    """Insert default achievements."""
    achievements_table = table(
        'achievements',
        column('name', String),
        column('description', String),
        column('icon', String),
        column('category', String),
        column('rarity', String),
        column('reward_points', Integer),
        column('unlock_criteria', JSON),
    )

    op.bulk_insert(achievements_table, ACHIEVEMENTS)


def downgrade():
    """Remove seeded achievements."""
    names = [a['name'] for a in ACHIEVEMENTS]
    placeholders = ', '.join(f"'{name}'" for name in names)
    op.execute(f"DELETE FROM achievements WHERE name IN ({placeholders})")
