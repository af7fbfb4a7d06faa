"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from postboard.api import auth, feed, pages, posts
from postboard.api.dependencies import LoginRequired
from postboard.api.templating import render_form_errors
from postboard.config import get_settings
from postboard.database import init_db

settings = get_settings()

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Route application logs to stderr at the configured level."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    configure_logging()
    if settings.auto_create_tables:
        init_db()
    logger.info(f"Postboard started ({settings.environment})")
    yield


app = FastAPI(
    title="Postboard",
    description="Community posting board with a categorized feed",
    version="0.1.0",
    lifespan=lifespan,
)

app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    """Send anonymous visitors of protected routes to the login page."""
    return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Show invalid form posts as pages; other requests keep the JSON 422."""
    if request.method != "POST":
        return await request_validation_exception_handler(request, exc)
    return render_form_errors(request, exc.errors())


# Register routers
app.include_router(auth.router)
app.include_router(feed.router)
app.include_router(posts.router)
app.include_router(pages.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
