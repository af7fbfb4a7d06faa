"""Pydantic schemas for form submissions and rendered views."""

from postboard.schemas.auth import LoginForm, RegisterForm, SessionUser, SignForm
from postboard.schemas.feed import AuthorView, CategorizedFeed, CommentView, PostView
from postboard.schemas.post import PostForm

__all__ = [
    "LoginForm",
    "SignForm",
    "RegisterForm",
    "SessionUser",
    "PostForm",
    "AuthorView",
    "CommentView",
    "PostView",
    "CategorizedFeed",
]
