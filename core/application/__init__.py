"""Application layer - request mediator, handlers and DTOs."""

from .mediator import (
    CurrentUser,
    HandlerContext,
    Mediator,
    Request,
    RequestHandler,
    RequestValidator,
    handles,
    validates,
)
from .result import Result, ResultKind

__all__ = [
    "CurrentUser",
    "HandlerContext",
    "Mediator",
    "Request",
    "RequestHandler",
    "RequestValidator",
    "Result",
    "ResultKind",
    "handles",
    "validates",
]
