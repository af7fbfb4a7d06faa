"""Post schemas."""

from typing import Annotated

from fastapi import Form
from pydantic import AnyHttpUrl, BaseModel, Field, TypeAdapter, ValidationError, field_validator

from postboard.schemas.forms import validate_form

LINK_SCHEME_MESSAGE = "Link must be an http or https URL"

_http_url = TypeAdapter(AnyHttpUrl)


class PostForm(BaseModel):
    """Create-post form submission (image and poster arrive as file parts)."""

    title: str = Field(..., min_length=1, max_length=500)
    link: str | None = Field(None, max_length=2048)
    category: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)

    @field_validator("link")
    @classmethod
    def check_link(cls, value: str | None) -> str | None:
        """Treat a whitespace-only link as no link; anything else must be http(s)."""
        if value is None or not value.strip():
            return None
        value = value.strip()
        try:
            _http_url.validate_python(value)
        except ValidationError:
            raise ValueError(LINK_SCHEME_MESSAGE) from None
        return value

    @classmethod
    def as_form(
        cls,
        title: Annotated[str, Form()],
        category: Annotated[str, Form()],
        content: Annotated[str, Form()],
        link: Annotated[str | None, Form()] = None,
    ) -> "PostForm":
        return validate_form(cls, title=title, link=link, category=category, content=content)
