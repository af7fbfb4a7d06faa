"""Jinja2 template setup shared by the page routers."""

from collections.abc import Sequence
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates

from postboard.api.dependencies import SessionContext
from postboard.config import get_settings
from postboard.services.feed import ALL_CATEGORIES
from postboard.services.formatting import time_ago

settings = get_settings()

INTERNAL_ERROR_MESSAGE = "Internal server error"

templates = Jinja2Templates(directory=settings.templates_dir)
templates.env.globals["time_ago"] = time_ago
templates.env.globals["ALL_CATEGORIES"] = ALL_CATEGORIES


def render(
    request: Request,
    name: str,
    context: dict[str, Any] | None = None,
    session: SessionContext | None = None,
    status_code: int = 200,
):
    """Render a template with the signed-in user (if any) in its context."""
    page_context = {"user": session.user if session else None}
    page_context.update(context or {})
    return templates.TemplateResponse(request, name, page_context, status_code=status_code)


def render_error(
    request: Request,
    message: str = INTERNAL_ERROR_MESSAGE,
    session: SessionContext | None = None,
    status_code: int = 500,
):
    """Render the generic error page."""
    return render(request, "error.html", {"error": message}, session, status_code)


# Form posts that re-render their own page when the submission is invalid
FORM_TEMPLATES = {
    "/login": "login.html",
    "/sign": "sign.html",
    "/register": "register.html",
}


def describe_validation_errors(errors: Sequence[dict[str, Any]]) -> str:
    """Summarize validation errors as "field: message" pairs."""
    messages = []
    for error in errors:
        field = error["loc"][-1] if error.get("loc") else "form"
        messages.append(f"{field}: {error['msg'].removeprefix('Value error, ')}")
    return "; ".join(messages)


def render_form_errors(request: Request, errors: Sequence[dict[str, Any]]):
    """Re-render the submitted form, or the error page, with a 422."""
    message = describe_validation_errors(errors)
    template = FORM_TEMPLATES.get(request.url.path)
    if template is None:
        return render_error(request, message, status_code=422)
    return render(request, template, {"error": message}, status_code=422)
