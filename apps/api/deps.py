"""FastAPI dependencies for dependency injection."""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Header, Request

from core.application.mediator import CurrentUser, Mediator
from core.domain.exceptions import ForbiddenException, UnauthorizedException

ADMIN_ROLE = "admin"


def get_current_user(
    x_user_id: Optional[str] = Header(default=None),
    x_session_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> CurrentUser:
    """Caller identity from the headers set by the gateway.

    Args:
        x_user_id: Authenticated user id (UUID)
        x_session_id: Guest session id used for anonymous carts
        x_user_role: "admin" for back-office users

    Returns:
        CurrentUser (anonymous when no header is present)

    Raises:
        UnauthorizedException: If X-User-Id is not a valid UUID
    """
    user_id = None
    if x_user_id:
        try:
            user_id = UUID(x_user_id.strip())
        except ValueError:
            raise UnauthorizedException("Invalid user id")

    session_id = x_session_id.strip() if x_session_id and x_session_id.strip() else None
    is_admin = user_id is not None and (x_user_role or "").strip().lower() == ADMIN_ROLE
    return CurrentUser(user_id=user_id, session_id=session_id, is_admin=is_admin)


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Reject callers without the admin role (403)."""
    if not user.is_admin:
        raise ForbiddenException("Admin access required")
    return user


def get_mediator(request: Request, user: CurrentUser = Depends(get_current_user)) -> Mediator:
    """Mediator created in the app lifespan, acting as the current caller."""
    mediator: Mediator = request.app.state.mediator
    return mediator.for_user(user)
