"""User model."""

from sqlalchemy import Column, Integer, LargeBinary, String, Text
from sqlalchemy.orm import deferred

from postboard.config import get_settings
from postboard.database import Base
from postboard.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and post ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    # Stored exactly as submitted and compared verbatim on login.
    password = Column(String(255), nullable=False)
    avatar_data = deferred(Column(LargeBinary, nullable=True))
    avatar_content_type = Column(String(255), nullable=True)
    bio = Column(Text, nullable=False, default=lambda: get_settings().default_bio)

    @property
    def has_avatar(self) -> bool:
        """Check if an avatar was uploaded."""
        return self.avatar_content_type is not None
