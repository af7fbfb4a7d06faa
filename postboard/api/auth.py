"""Authentication pages: login, registration and logout."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from postboard.api.dependencies import (
    SessionContext,
    clear_session_cookie,
    get_session_context,
    get_session_service,
    set_session_cookie,
)
from postboard.api.templating import INTERNAL_ERROR_MESSAGE, render
from postboard.database import get_db
from postboard.schemas.auth import LoginForm, RegisterForm, SignForm
from postboard.services.auth import (
    INVALID_CREDENTIALS_MESSAGE,
    EmailAlreadyRegistered,
    authenticate_user,
    create_user,
)
from postboard.services.sessions import SessionService
from postboard.services.uploads import read_attachment

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request):
    """Render the login form."""
    return render(request, "login.html", {"error": None})


@router.post("/login", response_class=HTMLResponse)
def login(
    request: Request,
    form: Annotated[LoginForm, Depends(LoginForm.as_form)],
    db: Annotated[Session, Depends(get_db)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
):
    """Login with email and password, then go to the feed."""
    try:
        user = authenticate_user(db, form.email, form.password)
        if not user:
            return render(request, "login.html", {"error": INVALID_CREDENTIALS_MESSAGE})
        token = sessions.start(user)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Login failed for {form.email}: {e}")
        return render(
            request,
            "login.html",
            {"error": INTERNAL_ERROR_MESSAGE},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    set_session_cookie(response, token)
    return response


@router.get("/sign", response_class=HTMLResponse)
def sign_page(request: Request):
    """Render the registration form."""
    return render(request, "sign.html", {"error": None})


@router.post("/sign", response_class=HTMLResponse)
def sign(
    request: Request,
    form: Annotated[SignForm, Depends(SignForm.as_form)],
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user, then go to the login page."""
    try:
        create_user(db, form.username, form.email, form.password)
    except EmailAlreadyRegistered as e:
        return render(request, "sign.html", {"error": str(e)})
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Registration failed for {form.email}: {e}")
        return render(
            request,
            "sign.html",
            {"error": INTERNAL_ERROR_MESSAGE},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/register", response_class=HTMLResponse)
def register_page(request: Request):
    """Render the registration form with bio and avatar fields."""
    return render(request, "register.html", {"error": None})


@router.post("/register", response_class=HTMLResponse)
async def register(
    request: Request,
    form: Annotated[RegisterForm, Depends(RegisterForm.as_form)],
    db: Annotated[Session, Depends(get_db)],
    avatar: Annotated[UploadFile | None, File()] = None,
):
    """Register a new user with an optional bio and avatar.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    avatar_attachment = await read_attachment(avatar)
    try:
        create_user(
            db,
            form.username,
            form.email,
            form.password,
            bio=form.bio,
            avatar=avatar_attachment,
        )
    except EmailAlreadyRegistered as e:
        return render(request, "register.html", {"error": str(e)})
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Registration failed for {form.email}: {e}")
        return render(
            request,
            "register.html",
            {"error": INTERNAL_ERROR_MESSAGE},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/logout")
def logout(
    context: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[Session, Depends(get_db)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
):
    """Destroy the session and go to the login page, whatever happens."""
    if context.token:
        try:
            sessions.destroy(context.token)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to destroy session: {e}")

    response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    clear_session_cookie(response)
    return response
