"""
Event Store Implementation.

Append-only storage for domain events in the same database as the
aggregates, written inside the unit of work transaction.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.events.base import DomainEvent
from core.domain.exceptions import ConflictException
from core.infrastructure.logging import get_logger

from .models.event_model import EventModel

logger = get_logger(__name__)


class ConcurrencyError(ConflictException):
    """Raised when concurrent modification detected."""
    pass


@dataclass(frozen=True)
class StoredEvent:
    """A domain event as read back from the store."""
    event_id: str
    event_type: str
    event_version: int
    aggregate_id: str
    aggregate_type: str
    sequence_number: int
    occurred_at: datetime
    data: Dict[str, Any]
    execution_id: Optional[str] = None
    user_id: Optional[str] = None


class EventStore:
    """
    Event Store for domain events.
    
    Features:
    - Append-only (events never modified or deleted)
    - Per-aggregate sequence numbers (unique, so concurrent writers conflict)
    - Event versioning
    
    Usage:
        async with uow:
            await uow.events.append(event)
            events = await uow.events.get_events(str(order.id))
    """
    
    def __init__(self, session: AsyncSession):
        """
        Initialize event store.
        
        Args:
            session: SQLAlchemy async session
        """
        self.session = session
    
    async def append(self, event: DomainEvent) -> int:
        """
        Append event to store.
        
        This is append-only. Events are immutable once written.
        
        Args:
            event: Domain event to append
        
        Returns:
            Sequence number assigned to the event
        
        Raises:
            ConcurrencyError: If another writer took the same sequence number
        """
        sequence_number = await self.get_latest_sequence(event.aggregate_id) + 1

        event_model = EventModel(
            event_id=event.event_id,
            event_type=event.event_type,
            event_version=event.event_version,
            aggregate_id=event.aggregate_id,
            aggregate_type=event.aggregate_type,
            event_data=event.get_event_data(),
            execution_id=event.execution_id,
            user_id=event.user_id,
            occurred_at=event.occurred_at,
            sequence_number=sequence_number,
        )
        
        try:
            self.session.add(event_model)
            await self.session.flush()
        except IntegrityError as e:
            logger.error(f"Failed to append {event.event_type}: {e}")
            raise ConcurrencyError(
                "Event append failed - concurrent modification detected"
            ) from e

        logger.debug(
            f"Event appended: {event.event_type} "
            f"(aggregate: {event.aggregate_id}, sequence: {sequence_number})"
        )
        return sequence_number
    
    async def get_events(self, aggregate_id: str) -> List[StoredEvent]:
        """
        Get all events for an aggregate.
        
        Args:
            aggregate_id: Aggregate ID
        
        Returns:
            List of stored events in sequence order
        """
        result = await self.session.execute(
            select(EventModel)
            .where(EventModel.aggregate_id == aggregate_id)
            .order_by(EventModel.sequence_number)
        )
        return [self._to_stored_event(model) for model in result.scalars().all()]
    
    async def get_latest_sequence(self, aggregate_id: str) -> int:
        """
        Get latest sequence number for aggregate.
        
        Args:
            aggregate_id: Aggregate ID
        
        Returns:
            Latest sequence number (0 if no events)
        """
        max_seq = await self.session.scalar(
            select(func.max(EventModel.sequence_number)).where(
                EventModel.aggregate_id == aggregate_id
            )
        )
        return max_seq or 0
    
    @staticmethod
    def _to_stored_event(model: EventModel) -> StoredEvent:
        return StoredEvent(
            event_id=model.event_id,
            event_type=model.event_type,
            event_version=model.event_version,
            aggregate_id=model.aggregate_id,
            aggregate_type=model.aggregate_type,
            sequence_number=model.sequence_number,
            occurred_at=model.occurred_at,
            data=dict(model.event_data or {}),
            execution_id=model.execution_id,
            user_id=model.user_id,
        )
