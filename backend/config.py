import os
from datetime import datetime

ENV = os.getenv("ENV", "development").lower()

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./hackpot.db")

# JWT Configuration
# In production, set SECRET_KEY environment variable to a secure random value
_DEFAULT_SECRET_KEY = "dev-secret-key-change-in-production-hackpot"
SECRET_KEY = os.getenv("SECRET_KEY", _DEFAULT_SECRET_KEY)  # Default for development only
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# Achievements
# Accounts created strictly before this instant qualify for the early_user achievement.
EARLY_USER_CUTOFF = datetime.fromisoformat(
    os.getenv("EARLY_USER_CUTOFF", "2025-03-01T00:00:00+00:00")
)
XP_PER_LEVEL = int(os.getenv("XP_PER_LEVEL", "1000"))
NOTIFICATION_AUTO_DISMISS_SECONDS = int(os.getenv("NOTIFICATION_AUTO_DISMISS_SECONDS", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def validate_config() -> None:
    """
    Validate required configuration.

    This is intentionally strict only in production so that local development
    and tests can run with minimal environment setup.
    """
    if ENV != "production":
        return

    errors: list[str] = []

    if not SECRET_KEY or SECRET_KEY == _DEFAULT_SECRET_KEY:
        errors.append("SECRET_KEY must be set to a secure value in production")

    if not os.getenv("DATABASE_URL"):
        errors.append("DATABASE_URL must be set in production")
    elif DATABASE_URL.startswith("sqlite"):
        errors.append("DATABASE_URL must point at PostgreSQL in production")

    if XP_PER_LEVEL <= 0:
        errors.append("XP_PER_LEVEL must be a positive integer")

    if EARLY_USER_CUTOFF.tzinfo is None:
        errors.append("EARLY_USER_CUTOFF must include a UTC offset")

    if errors:
        raise RuntimeError("Invalid configuration:\n- " + "\n- ".join(errors))
