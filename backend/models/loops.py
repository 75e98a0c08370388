"""Prediction rounds ("loops") and the tickets bought into them."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import backref, relationship

from database import Base


class Loop(Base):
    """A single round with an entry fee, prize pool and ticket cap."""

    __tablename__ = "loops"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(128), nullable=False)
    difficulty = Column(String(32), nullable=False)
    ticket_price = Column(Numeric(18, 6), nullable=False)
    max_tickets = Column(Integer, nullable=False)
    prize_pool = Column(Numeric(18, 6), nullable=False, default=0)
    status = Column(String(16), nullable=False, default="active")  # active | completed | cancelled
    winner_address = Column(String(64), nullable=True, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
    completed_at = Column(DateTime, nullable=True)


class LoopEntry(Base):
    """One purchased ticket, keyed by the buyer's wallet address."""

    __tablename__ = "loop_entries"

    id = Column(Integer, primary_key=True, index=True)
    loop_id = Column(
        Integer,
        ForeignKey("loops.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    wallet_address = Column(String(64), nullable=False, index=True)
    ticket_number = Column(Integer, nullable=False)
    amount_paid = Column(Numeric(18, 6), nullable=False)
    transaction_id = Column(String(128), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)

    loop = relationship("Loop", backref=backref("entries", passive_deletes=True))
