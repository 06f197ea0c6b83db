"""
Event Bus Implementation (Infrastructure Layer).

Notifies subscribers about domain events the unit of work has committed.
"""
import asyncio
from typing import Dict, List, Type

from core.domain.event_bus import EventBus, EventHandler
from core.domain.events.base import DomainEvent
from core.infrastructure.logging import get_logger


logger = get_logger(__name__)


class InMemoryEventBus(EventBus):
    """
    In-Memory Event Bus Implementation.
    
    Features:
    - Subscribers register per event type (subclasses match too)
    - Supports async and plain callables
    - A failing subscriber is logged and never breaks the publisher
    
    Architecture:
    - Infrastructure layer; persistence happens in the unit of work
    - Can be replaced with a message broker
    """
    
    def __init__(self):
        """Initialize event bus with no subscribers."""
        self._subscribers: Dict[Type[DomainEvent], List[EventHandler]] = {}
    
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a single domain event to its subscribers.
        
        Args:
            event: Domain event to publish
        """
        logger.info(f"Publishing event: {event.event_type} (aggregate: {event.aggregate_id})")
        await self._notify_subscribers(event)
    
    async def publish_all(self, events: List[DomainEvent]) -> None:
        """
        Publish multiple domain events in order.
        
        Args:
            events: List of domain events to publish
        """
        for event in events:
            await self.publish(event)
    
    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe to one event type.
        
        Args:
            event_type: DomainEvent subclass
            handler: Callback receiving the event
        """
        self._subscribers.setdefault(event_type, []).append(handler)
        logger.debug(f"Registered {handler.__name__} for {event_type.__name__}")
    
    def unsubscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def handlers_for(self, event: DomainEvent) -> List[EventHandler]:
        handlers: List[EventHandler] = []
        for event_type, registered in self._subscribers.items():
            if isinstance(event, event_type):
                handlers.extend(registered)
        return handlers
    
    async def _notify_subscribers(self, event: DomainEvent) -> None:
        """Notify all subscribers about an event."""
        for subscriber in self.handlers_for(event):
            try:
                if asyncio.iscoroutinefunction(subscriber):
                    await subscriber(event)
                else:
                    subscriber(event)
            except Exception as e:
                logger.error(f"Subscriber {subscriber.__name__} failed: {e}", exc_info=True)
