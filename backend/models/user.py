from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, Numeric, String

from database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    display_name = Column(String(64), nullable=True)
    role = Column(String(16), nullable=False, default="user")  # guest | user | admin | super_admin
    referral_code = Column(String(16), unique=True, nullable=True)
    total_spent = Column(Numeric(18, 6), nullable=False, default=0)
    total_earnings = Column(Numeric(18, 6), nullable=False, default=0)
    experience_points = Column(Integer, nullable=False, default=0)
    level = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.role in ("admin", "super_admin")
