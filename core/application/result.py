"""Typed outcome of a handled request."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ResultKind(str, Enum):
    """Failure category; the API maps each kind to an HTTP status."""

    OK = "ok"
    FAILURE = "failure"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Success value or error message of a command/query handler.

    Business-rule failures are returned, not raised, so callers can
    branch on ``succeeded`` without exception handling.
    """

    succeeded: bool
    value: Optional[T] = None
    error: Optional[str] = None
    kind: ResultKind = ResultKind.OK

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(succeeded=True, value=value)

    @classmethod
    def failure(cls, error: str, kind: ResultKind = ResultKind.FAILURE) -> "Result[T]":
        return cls(succeeded=False, error=error, kind=kind)

    @classmethod
    def not_found(cls, error: str) -> "Result[T]":
        return cls.failure(error, ResultKind.NOT_FOUND)

    @classmethod
    def unauthorized(cls, error: str = "User not authenticated") -> "Result[T]":
        return cls.failure(error, ResultKind.UNAUTHORIZED)

    @classmethod
    def forbidden(cls, error: str = "Access denied") -> "Result[T]":
        return cls.failure(error, ResultKind.FORBIDDEN)

    @classmethod
    def conflict(cls, error: str) -> "Result[T]":
        return cls.failure(error, ResultKind.CONFLICT)

    @property
    def failed(self) -> bool:
        return not self.succeeded
