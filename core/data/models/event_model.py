"""SQLAlchemy ORM model for the domain event store."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Integer, String, UniqueConstraint

from .base import Base


class EventModel(Base):
    """
    Append-only log of domain events.

    ``sequence_number`` is 1-based per aggregate; the unique constraint
    rejects concurrent writers appending the same position.
    """

    __tablename__ = "domain_events"
    __table_args__ = (UniqueConstraint("aggregate_id", "sequence_number"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(String(36), unique=True, nullable=False, index=True)
    event_type = Column(String(100), nullable=False, index=True)
    event_version = Column(Integer, nullable=False, default=1)
    aggregate_id = Column(String(255), nullable=False, index=True)
    aggregate_type = Column(String(100), nullable=False, index=True)
    event_data = Column(JSON, nullable=False)
    execution_id = Column(String(36), nullable=True, index=True)
    user_id = Column(String(255), nullable=True)
    occurred_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    sequence_number = Column(Integer, nullable=False)
