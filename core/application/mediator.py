"""
Request mediator.

Routes typed requests (commands and queries) to the handler class
registered for them, running the registered validators first.

Flow:
1. Look up the handler for the request type
2. Run every validator (errors raise ValidationException)
3. Build the handler with the HandlerContext and await ``handle``
"""
import dataclasses
import importlib
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.data.uow import UnitOfWork, create_uow
from core.domain.event_bus import EventBus
from core.domain.exceptions import ValidationException
from core.infrastructure.logging import get_logger
from core.settings.sections.store import StoreSettings

logger = get_logger(__name__)

TRequest = TypeVar("TRequest", bound="Request")
TResponse = TypeVar("TResponse")

# Importing this package registers every handler and validator
FEATURES_PACKAGE = "core.application.features"


class Request(BaseModel):
    """Base class for commands and queries (immutable)."""

    model_config = {"frozen": True}


@dataclass(frozen=True)
class CurrentUser:
    """Caller identity resolved by the API layer."""

    user_id: Optional[UUID] = None
    session_id: Optional[str] = None
    is_admin: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


@dataclass
class HandlerContext:
    """Everything a handler needs besides its request."""

    session_factory: async_sessionmaker
    settings: StoreSettings
    event_bus: Optional[EventBus] = None
    current_user: CurrentUser = field(default_factory=CurrentUser)

    def uow(self) -> UnitOfWork:
        return create_uow(self.session_factory, self.event_bus)


class RequestHandler(ABC, Generic[TRequest, TResponse]):
    """Handles exactly one request type."""

    def __init__(self, context: HandlerContext) -> None:
        self.context = context

    @property
    def user(self) -> CurrentUser:
        return self.context.current_user

    @property
    def settings(self) -> StoreSettings:
        return self.context.settings

    @abstractmethod
    async def handle(self, request: TRequest) -> TResponse:
        pass


class RequestValidator(ABC, Generic[TRequest]):
    """Checks a request before its handler runs."""

    def __init__(self, context: HandlerContext) -> None:
        self.context = context

    @abstractmethod
    def validate(self, request: TRequest) -> List[str]:
        """Return error messages; an empty list means valid."""
        pass


_HANDLERS: Dict[Type[Request], Type[RequestHandler]] = {}
_VALIDATORS: Dict[Type[Request], List[Type[RequestValidator]]] = {}


def handles(request_type: Type[Request]) -> Callable[[Type[RequestHandler]], Type[RequestHandler]]:
    """Class decorator registering the handler of ``request_type``."""

    def register(handler_class: Type[RequestHandler]) -> Type[RequestHandler]:
        existing = _HANDLERS.get(request_type)
        if existing is not None and existing is not handler_class:
            raise RuntimeError(
                f"{request_type.__name__} already handled by {existing.__name__}"
            )
        _HANDLERS[request_type] = handler_class
        return handler_class

    return register


def validates(request_type: Type[Request]) -> Callable[[Type[RequestValidator]], Type[RequestValidator]]:
    """Class decorator adding a validator for ``request_type``."""

    def register(validator_class: Type[RequestValidator]) -> Type[RequestValidator]:
        validators = _VALIDATORS.setdefault(request_type, [])
        if validator_class not in validators:
            validators.append(validator_class)
        return validator_class

    return register


class Mediator:
    """
    Sends requests to their handlers.

    Usage:
        mediator = Mediator(context)
        result = await mediator.send(GetCartQuery())
    """

    def __init__(self, context: HandlerContext) -> None:
        importlib.import_module(FEATURES_PACKAGE)
        self._context = context

    @property
    def context(self) -> HandlerContext:
        return self._context

    def for_user(self, user: CurrentUser) -> "Mediator":
        """Mediator sharing this one's resources, acting as ``user``."""
        return Mediator(dataclasses.replace(self._context, current_user=user))

    async def send(self, request: Request) -> Any:
        """
        Validate and handle a request.

        Args:
            request: Command or query instance

        Returns:
            Whatever the handler returns (usually a Result or a DTO)

        Raises:
            LookupError: If no handler is registered for the request type
            ValidationException: If a validator reports errors
        """
        request_name = type(request).__name__
        handler_class = _HANDLERS.get(type(request))
        if handler_class is None:
            raise LookupError(f"No handler registered for {request_name}")

        errors: List[str] = []
        for validator_class in _VALIDATORS.get(type(request), []):
            errors.extend(validator_class(self._context).validate(request))
        if errors:
            logger.info(f"{request_name} rejected: {'; '.join(errors)}")
            raise ValidationException(errors)

        started = time.perf_counter()
        try:
            return await handler_class(self._context).handle(request)
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(f"Handled {request_name} in {elapsed_ms:.1f}ms")
