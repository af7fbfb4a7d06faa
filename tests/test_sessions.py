"""Tests for server-side sessions."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from postboard.api.dependencies import get_session_context, parse_post_id
from postboard.models.mixins import utc_now
from postboard.models.user import User
from postboard.models.user_session import UserSession
from postboard.services.sessions import SessionService, hash_token


@pytest.fixture
def member(db):
    """Create a user to bind sessions to."""
    member = User(username="member", email="member@example.com", password="pw", bio="Hello")
    db.add(member)
    db.commit()
    return member


def test_start_stores_only_token_hash(db, member):
    """Test the raw token is never persisted."""
    token = SessionService(db).start(member)

    record = db.query(UserSession).one()
    assert record.token_hash == hash_token(token)
    assert record.token_hash != token
    assert record.user_id == member.id
    assert record.user_data == {
        "id": member.id,
        "username": "member",
        "email": "member@example.com",
        "bio": "Hello",
    }


def test_resolve_returns_bound_user(db, member):
    """Test a live session resolves to its user snapshot."""
    service = SessionService(db)
    token = service.start(member)

    user = service.resolve(token)
    assert user.id == member.id
    assert user.username == "member"


def test_resolve_unknown_token(db, member):
    """Test unknown tokens resolve to nobody."""
    SessionService(db).start(member)
    assert SessionService(db).resolve("bogus") is None


def test_resolve_expired_session(db, member):
    """Test expired sessions are ignored."""
    service = SessionService(db)
    token = service.start(member)

    record = db.query(UserSession).one()
    record.expires_at = utc_now() - timedelta(minutes=1)
    db.commit()

    assert service.resolve(token) is None


def test_snapshot_outlives_user(db, member):
    """Test the session keeps its snapshot even if the user row disappears."""
    service = SessionService(db)
    token = service.start(member)

    db.delete(member)
    db.commit()

    user = service.resolve(token)
    assert user is not None
    assert user.username == "member"


def test_destroy(db, member):
    """Test destroying a session removes it."""
    service = SessionService(db)
    token = service.start(member)

    assert service.destroy(token) is True
    assert service.resolve(token) is None
    assert db.query(UserSession).count() == 0
    assert service.destroy(token) is False


def test_tokens_are_unique(db, member):
    """Test each login gets its own session."""
    service = SessionService(db)
    assert service.start(member) != service.start(member)
    assert db.query(UserSession).count() == 2


def test_session_context_store_failure_rolls_back():
    """Test a failed lookup is anonymous and leaves the request session usable."""
    request = MagicMock(cookies={"postboard_session": "some-token"})
    db = MagicMock()
    db.query.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))

    context = get_session_context(request, db)

    assert context.token == "some-token"
    assert context.is_authenticated is False
    db.rollback.assert_called_once()


def test_session_context_without_cookie():
    """Test a request with no cookie never touches the store."""
    db = MagicMock()
    context = get_session_context(MagicMock(cookies={}), db)
    assert context.token is None
    db.query.assert_not_called()


@pytest.mark.parametrize(
    "raw, expected",
    [("42", 42), ("0042", 42), ("abc", None), ("4_2", None), ("-1", None), ("²", None), ("", None)],
)
def test_parse_post_id(raw, expected):
    assert parse_post_id(raw) == expected
