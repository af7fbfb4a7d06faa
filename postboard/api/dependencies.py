"""FastAPI dependencies for sessions and services."""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from postboard.config import get_settings
from postboard.database import get_db
from postboard.schemas.auth import SessionUser
from postboard.services.feed import FeedService
from postboard.services.posts import PostService
from postboard.services.sessions import SessionService

logger = logging.getLogger(__name__)

settings = get_settings()

# Largest value a 64-bit integer primary key can hold
MAX_ID = 2**63 - 1


class LoginRequired(Exception):
    """Raised by protected routes when the request has no bound session."""


@dataclass(frozen=True)
class SessionContext:
    """Per-request view of the session: the cookie token and the bound user."""

    token: str | None = None
    user: SessionUser | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


def get_session_context(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> SessionContext:
    """Resolve the session cookie into a SessionContext.

    An unreadable session store is logged and treated as anonymous.
    """
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return SessionContext()

    try:
        user = SessionService(db).resolve(token)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to resolve session: {e}")
        user = None

    return SessionContext(token=token, user=user)


def require_session(
    context: Annotated[SessionContext, Depends(get_session_context)],
) -> SessionContext:
    """Allow the request through only when a user is bound to the session."""
    if not context.is_authenticated:
        raise LoginRequired()
    return context


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token cookie to a response."""
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_ttl_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    """Remove the session token cookie from the client."""
    response.delete_cookie(settings.session_cookie_name)


def get_session_service(
    db: Annotated[Session, Depends(get_db)],
) -> SessionService:
    """Get session service with dependencies."""
    return SessionService(db)


def get_feed_service(
    db: Annotated[Session, Depends(get_db)],
) -> FeedService:
    """Get feed service with dependencies."""
    return FeedService(db)


def get_post_service(
    db: Annotated[Session, Depends(get_db)],
) -> PostService:
    """Get post service with dependencies."""
    return PostService(db)


def parse_post_id(raw: str) -> int | None:
    """Parse a post id from the URL, or None if it is not an integer."""
    if not (raw.isascii() and raw.isdigit()):
        return None
    post_id = int(raw)
    return post_id if post_id <= MAX_ID else None
