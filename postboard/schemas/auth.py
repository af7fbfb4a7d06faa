"""Authentication schemas."""

from typing import Annotated

from fastapi import Form
from pydantic import BaseModel, ConfigDict, Field

from postboard.schemas.forms import validate_form


class LoginForm(BaseModel):
    """Login form submission."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)

    @classmethod
    def as_form(
        cls,
        email: Annotated[str, Form()],
        password: Annotated[str, Form()],
    ) -> "LoginForm":
        return validate_form(cls, email=email, password=password)


class SignForm(BaseModel):
    """Credential-only registration form submission."""

    username: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)

    @classmethod
    def as_form(
        cls,
        username: Annotated[str, Form()],
        email: Annotated[str, Form()],
        password: Annotated[str, Form()],
    ) -> "SignForm":
        return validate_form(cls, username=username, email=email, password=password)


class RegisterForm(SignForm):
    """Registration form submission that also carries a bio.

    The avatar arrives as a separate file part.
    """

    bio: str | None = None

    @classmethod
    def as_form(
        cls,
        username: Annotated[str, Form()],
        email: Annotated[str, Form()],
        password: Annotated[str, Form()],
        bio: Annotated[str | None, Form()] = None,
    ) -> "RegisterForm":
        return validate_form(cls, username=username, email=email, password=password, bio=bio)


class SessionUser(BaseModel):
    """Snapshot of the user bound to a session."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    bio: str | None = None
