"""SQLAlchemy models."""

from postboard.models.post import Comment, Post, PostReaction
from postboard.models.user import User
from postboard.models.user_session import UserSession

__all__ = [
    "User",
    "Post",
    "PostReaction",
    "Comment",
    "UserSession",
]
