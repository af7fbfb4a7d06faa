"""Server-side session storage keyed by opaque cookie tokens."""

import hashlib
import logging
import secrets
from datetime import timedelta

from sqlalchemy.orm import Session

from postboard.config import get_settings
from postboard.models.mixins import as_utc, utc_now
from postboard.models.user import User
from postboard.models.user_session import UserSession
from postboard.schemas.auth import SessionUser

logger = logging.getLogger(__name__)

settings = get_settings()


def generate_session_token() -> str:
    """Generate a URL-safe 256-bit random token."""
    return secrets.token_urlsafe(32)


def hash_token(token: str) -> str:
    """Hash a token for storage; the raw token only lives in the cookie."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class SessionService:
    """Creates, resolves and destroys user sessions."""

    def __init__(self, db: Session):
        self.db = db

    def start(self, user: User) -> str:
        """Bind a snapshot of the user to a new session and return its token."""
        token = generate_session_token()
        snapshot = SessionUser.model_validate(user)
        record = UserSession(
            token_hash=hash_token(token),
            user_id=user.id,
            user_data=snapshot.model_dump(),
            expires_at=utc_now() + timedelta(minutes=settings.session_ttl_minutes),
        )
        self.db.add(record)
        self.db.commit()
        logger.info(f"Started session for user {user.id}")
        return token

    def resolve(self, token: str) -> SessionUser | None:
        """Return the user bound to an unexpired session, or None."""
        record = (
            self.db.query(UserSession).filter(UserSession.token_hash == hash_token(token)).first()
        )
        if record is None:
            return None
        if as_utc(record.expires_at) <= utc_now():
            return None
        return SessionUser.model_validate(record.user_data)

    def destroy(self, token: str) -> bool:
        """Delete the session for a token. Returns False if there was none."""
        deleted = (
            self.db.query(UserSession)
            .filter(UserSession.token_hash == hash_token(token))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0
