#!/usr/bin/env python
"""
Initialize a database with all tables and the default achievement catalog.
Intended for local development; deployed databases are managed by Alembic.
"""
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import Base, SessionLocal, engine
import models  # noqa: F401  (registers tables)
from models.achievements import Achievement
from schemas.achievements import AchievementCreate
from services.admin_service import AchievementAdminService


DEFAULT_ACHIEVEMENTS = [
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
    {
        "name": "Recruiter",
        "description": "Refer 5 friends",
        "icon": "users",
        "category": "social",
        "rarity": "rare",
        "reward_points": 500,
        "unlock_criteria": {"type": "referrals", "target": 5},
    },
    {
        "name": "High Roller",
        "description": "Spend 1000 in total",
        "icon": "coins",
        "category": "milestone",
        "rarity": "epic",
        "reward_points": 750,
        "unlock_criteria": {"type": "total_spent", "target": 1000},
    },
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


def init_database():
    """Create tables and seed achievements when the catalog is empty."""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created.")

    db = SessionLocal()
    try:
        if db.query(Achievement).count():
            print("Achievements already seeded.")
            return

        service = AchievementAdminService(db)
        for data in DEFAULT_ACHIEVEMENTS:
            service.create(AchievementCreate(**data))
        print(f"Seeded {len(DEFAULT_ACHIEVEMENTS)} achievements.")
    finally:
        db.close()

    print("Database initialization complete!")


if __name__ == "__main__":
    init_database()
