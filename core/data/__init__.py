"""Data layer - infrastructure persistence and mapping."""

from .event_store import EventStore, StoredEvent
from .models import Base
from .uow import UnitOfWork, create_uow

__all__ = [
    "Base",
    "create_uow",
    "EventStore",
    "StoredEvent",
    "UnitOfWork",
]
