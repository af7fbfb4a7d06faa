"""Authentication service for registration and credential checks."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, undefer

from postboard.config import get_settings
from postboard.models.user import User
from postboard.services.errors import PostboardError
from postboard.services.uploads import Attachment

logger = logging.getLogger(__name__)

settings = get_settings()

# Same message for unknown email and wrong password.
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
EMAIL_TAKEN_MESSAGE = "Email already registered"


class EmailAlreadyRegistered(PostboardError):
    """Raised when registering with an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(EMAIL_TAKEN_MESSAGE)
        self.email = email


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email (exact, case-sensitive match)."""
    return db.query(User).filter(User.email == email).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password.

    Credentials are stored as submitted, so this is a direct comparison.
    """
    user = get_user_by_email(db, email)
    if not user:
        return None
    if password != user.password:
        return None
    return user


def create_user(
    db: Session,
    username: str,
    email: str,
    password: str,
    bio: str | None = None,
    avatar: Attachment | None = None,
) -> User:
    """Create a new user, rejecting emails that are already registered."""
    if get_user_by_email(db, email):
        raise EmailAlreadyRegistered(email)

    user = User(
        username=username,
        email=email,
        password=password,
        bio=bio if bio and bio.strip() else settings.default_bio,
        avatar_data=avatar.data if avatar else None,
        avatar_content_type=avatar.content_type if avatar else None,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration for the same email
        db.rollback()
        raise EmailAlreadyRegistered(email) from None
    db.refresh(user)

    logger.info(f"Registered user {user.id} ({user.username})")
    return user


def get_avatar(db: Session, user_id: int) -> Attachment | None:
    """Load a user's stored avatar, if any."""
    user = db.query(User).options(undefer(User.avatar_data)).filter(User.id == user_id).first()
    if user is None or user.avatar_data is None:
        return None
    return Attachment(data=user.avatar_data, content_type=user.avatar_content_type)
