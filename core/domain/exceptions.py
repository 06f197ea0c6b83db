"""
Domain Layer Exceptions

Every business-rule failure raised by the domain or application layer derives
from DomainException. The API layer maps each subclass to an HTTP status via
its ``code`` attribute.
"""
from typing import Iterable, List, Optional


class DomainException(Exception):
    """
    Base exception for all domain layer errors.

    Attributes:
        message: Human-readable error description
        code: Error category used by the API layer
    """

    code = "invalid"

    def __init__(self, message: str) -> None:
        """
        Initialize domain exception with error message.

        Args:
            message: Human-readable error description
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


class NotFoundException(DomainException):
    """Raised when a requested entity does not exist."""

    code = "not_found"

    @classmethod
    def for_entity(cls, name: str, key: object) -> "NotFoundException":
        return cls(f'Entity "{name}" ({key}) was not found.')


class ValidationException(DomainException):
    """
    Raised when a request fails one or more validation rules.

    The individual messages are kept in ``errors`` and joined with "; "
    for the top-level message.
    """

    code = "validation"

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors) or "Validation failed")


class UnauthorizedException(DomainException):
    """Raised when an operation needs an authenticated user."""

    code = "unauthorized"

    def __init__(self, message: str = "User not authenticated") -> None:
        super().__init__(message)


class ForbiddenException(DomainException):
    """Raised when the current user may not perform an operation."""

    code = "forbidden"

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message)


class ConflictException(DomainException):
    """Raised when a write collides with existing state (duplicate SKU, ...)."""

    code = "conflict"


class InvalidOrderTransitionError(DomainException):
    """Raised when an order is moved to a status its current status forbids."""

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot transition order from {current} to {target}")


class InsufficientStockError(DomainException):
    """Raised when a stock adjustment would drive a variant below zero."""

    def __init__(self, current_stock: int, message: Optional[str] = None) -> None:
        self.current_stock = current_stock
        super().__init__(
            message or f"Cannot reduce stock below zero. Current stock: {current_stock}"
        )
