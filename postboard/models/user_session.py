"""Server-side session model."""

from sqlalchemy import JSON, Column, DateTime, Integer, String

from postboard.database import Base
from postboard.models.mixins import TimestampMixin


class UserSession(Base, TimestampMixin):
    """Session bound to a user, keyed by the hash of the cookie token."""

    __tablename__ = "user_sessions"

    id = Column(Integer, primary_key=True)
    token_hash = Column(String(128), unique=True, nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    # Snapshot of the user taken at login: {"id", "username", "email", "bio"}
    user_data = Column(JSON, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
