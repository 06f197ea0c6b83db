"""Unit of Work pattern for atomic transactions."""

from typing import Dict, List, Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.event_bus import EventBus
from core.domain.events.base import DomainEvent
from core.domain.value_objects import ExecutionID
from core.infrastructure.logging import get_logger

from .event_store import EventStore
from .repositories import (
    SqlAlchemyAddressRepository,
    SqlAlchemyCartRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyPriceHistoryRepository,
    SqlAlchemyProductRepository,
    SqlAlchemyQuestionRepository,
    SqlAlchemyWishlistRepository,
)

logger = get_logger(__name__)


class UnitOfWork:
    """
    Unit of Work pattern for atomic transactions.

    Responsibilities:
    1. Manage SQLAlchemy session lifecycle
    2. Propagate ExecutionID to the events written in this transaction
    3. Atomic commit/rollback of all repository operations
    4. Lazy initialization of repositories
    5. Store, then publish, the domain events of collected aggregates
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
            event_bus: Bus notified after a successful commit
        """
        self._session_factory = session_factory
        self._event_bus = event_bus
        self._session: Optional[AsyncSession] = None
        self._execution_id: Optional[ExecutionID] = None
        self._collected: List[object] = []

        # Lazy-loaded repositories
        self._repositories: Dict[Type, object] = {}

    async def __aenter__(self) -> "UnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        self._execution_id = ExecutionID.generate()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback on exception, always close the session."""
        if exc_type is not None:
            await self._session.rollback()
        await self._session.close()
        self._collected.clear()

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._session

    @property
    def execution_id(self) -> ExecutionID:
        """Get current execution ID for tracing.

        Returns:
            ExecutionID value object
        """
        if self._execution_id is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._execution_id

    def _repository(self, repository_class: Type):
        session = self.session
        if repository_class not in self._repositories:
            self._repositories[repository_class] = repository_class(session)
        return self._repositories[repository_class]

    @property
    def addresses(self) -> SqlAlchemyAddressRepository:
        return self._repository(SqlAlchemyAddressRepository)

    @property
    def products(self) -> SqlAlchemyProductRepository:
        return self._repository(SqlAlchemyProductRepository)

    @property
    def price_history(self) -> SqlAlchemyPriceHistoryRepository:
        return self._repository(SqlAlchemyPriceHistoryRepository)

    @property
    def carts(self) -> SqlAlchemyCartRepository:
        return self._repository(SqlAlchemyCartRepository)

    @property
    def orders(self) -> SqlAlchemyOrderRepository:
        """Lazy-load order repository.

        Returns:
            SqlAlchemyOrderRepository instance
        """
        return self._repository(SqlAlchemyOrderRepository)

    @property
    def wishlists(self) -> SqlAlchemyWishlistRepository:
        return self._repository(SqlAlchemyWishlistRepository)

    @property
    def questions(self) -> SqlAlchemyQuestionRepository:
        return self._repository(SqlAlchemyQuestionRepository)

    @property
    def events(self) -> EventStore:
        return self._repository(EventStore)

    def collect(self, *aggregates: object) -> None:
        """Register aggregates whose domain events are stored on commit."""
        for aggregate in aggregates:
            if not any(tracked is aggregate for tracked in self._collected):
                self._collected.append(aggregate)

    def _pull_events(self) -> List[DomainEvent]:
        events: List[DomainEvent] = []
        for aggregate in self._collected:
            events.extend(aggregate.get_domain_events())
            aggregate.clear_domain_events()
        self._collected.clear()
        return events

    async def commit(self) -> None:
        """Append collected events, commit, then publish the events."""
        session = self.session
        events = self._pull_events()
        execution_id = str(self.execution_id.value)
        for event in events:
            if event.execution_id is None:
                event.execution_id = execution_id
            await self.events.append(event)

        await session.commit()

        if events:
            logger.info(f"Committed {len(events)} event(s) [execution {execution_id}]")
            if self._event_bus is not None:
                await self._event_bus.publish_all(events)

    async def rollback(self) -> None:
        """Rollback all pending changes."""
        await self.session.rollback()
        self._collected.clear()


def create_uow(
    session_factory: async_sessionmaker, event_bus: Optional[EventBus] = None
) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory
        event_bus: Optional bus for committed events

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory, event_bus)
