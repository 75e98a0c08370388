"""Shared pytest fixtures: in-memory database, API client, users and game data."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401  (registers tables)
from database import Base, get_db
from main import app
from models.achievements import Achievement
from models.loops import Loop, LoopEntry
from models.referrals import ReferralStats
from models.user import User
from routers.achievements import limiter
from services.auth import create_access_token
from services.notification_service import notification_center


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Session:
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def client(db_session: Session) -> TestClient:
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_notifications():
    notification_center.reset()
    yield
    notification_center.reset()


@pytest.fixture
def test_user(db_session: Session) -> User:
    user = User(
        email="player@example.com",
        display_name="player",
        created_at=datetime(2025, 6, 1, tzinfo=timezone.utc),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def other_user(db_session: Session) -> User:
    user = User(email="rival@example.com", display_name="rival")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def admin_user(db_session: Session) -> User:
    user = User(email="admin@example.com", display_name="admin", role="admin")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def valid_jwt_token(test_user: User) -> str:
    return create_access_token(test_user.id)


@pytest.fixture
def auth_headers(valid_jwt_token: str) -> dict:
    return {"Authorization": f"Bearer {valid_jwt_token}"}


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(admin_user.id)}"}


@pytest.fixture
def make_achievement(db_session: Session):
    """Factory creating an active achievement for a criteria type and target."""

    def _make(criteria_type: str, target: int, reward_points: int = 100, **kwargs) -> Achievement:
        fields = {
            "name": f"{criteria_type} x{target}",
            "description": f"Reach {target} {criteria_type}",
            "category": "gameplay",
            "reward_points": reward_points,
            "unlock_criteria": {"type": criteria_type, "target": target},
        }
        fields.update(kwargs)
        achievement = Achievement(**fields)
        db_session.add(achievement)
        db_session.commit()
        db_session.refresh(achievement)
        return achievement

    return _make


@pytest.fixture
def loop(db_session: Session) -> Loop:
    loop = Loop(
        name="Genesis",
        difficulty="easy",
        ticket_price=Decimal("1"),
        max_tickets=100,
        prize_pool=Decimal("0"),
    )
    db_session.add(loop)
    db_session.commit()
    db_session.refresh(loop)
    return loop


@pytest.fixture
def add_loop_entries(db_session: Session, loop: Loop):
    """Factory buying ``count`` tickets for a wallet."""

    def _add(wallet_address: str, count: int) -> None:
        existing = db_session.query(LoopEntry).count()
        for i in range(count):
            db_session.add(LoopEntry(
                loop_id=loop.id,
                wallet_address=wallet_address,
                ticket_number=existing + i + 1,
                amount_paid=Decimal("1"),
                transaction_id=f"tx-{existing + i + 1}",
            ))
        db_session.commit()

    return _add


@pytest.fixture
def add_loop_wins(db_session: Session):
    """Factory creating ``count`` completed loops won by a wallet."""

    def _add(wallet_address: str, count: int) -> None:
        for i in range(count):
            db_session.add(Loop(
                name=f"Won loop {i}",
                difficulty="hard",
                ticket_price=Decimal("5"),
                max_tickets=10,
                prize_pool=Decimal("50"),
                status="completed",
                winner_address=wallet_address,
                completed_at=datetime.now(timezone.utc),
            ))
        db_session.commit()

    return _add


@pytest.fixture
def set_referrals(db_session: Session):
    """Factory setting a user's referral total."""

    def _set(user_id: int, total: int) -> None:
        stats = db_session.query(ReferralStats).filter(ReferralStats.user_id == user_id).first()
        if stats is None:
            stats = ReferralStats(user_id=user_id)
            db_session.add(stats)
        stats.total_referrals = total
        db_session.commit()

    return _set
