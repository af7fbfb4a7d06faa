"""Static informational pages."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from postboard.api.dependencies import SessionContext, get_session_context
from postboard.api.templating import render

router = APIRouter(tags=["pages"])


@router.get("/about-us", response_class=HTMLResponse)
def about_us(
    request: Request,
    session: Annotated[SessionContext, Depends(get_session_context)],
):
    return render(request, "about_us.html", session=session)


@router.get("/contact-us", response_class=HTMLResponse)
def contact_us(
    request: Request,
    session: Annotated[SessionContext, Depends(get_session_context)],
):
    return render(request, "contact_us.html", session=session)
