"""Feed and post detail pages."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import HTMLResponse
from sqlalchemy.exc import SQLAlchemyError

from postboard.api.dependencies import (
    SessionContext,
    get_feed_service,
    get_session_context,
    parse_post_id,
)
from postboard.api.templating import render, render_error
from postboard.services.feed import ALL_CATEGORIES, FeedService

logger = logging.getLogger(__name__)

POST_NOT_FOUND_MESSAGE = "Post not found"

router = APIRouter(tags=["feed"])


def render_feed(
    request: Request,
    template: str,
    feed_service: FeedService,
    session: SessionContext,
    search: str | None,
    category: str | None,
):
    """Query the feed and render it with the given template.

    On a store failure the page still renders, with the error flag set,
    no posts, and the filters reset.
    """
    feed = feed_service.query_feed(search=search, category=category)
    if feed.error:
        return render(
            request,
            template,
            {
                "posts": {},
                "error": feed.error,
                "search": "",
                "selected_category": ALL_CATEGORIES,
            },
            session,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return render(
        request,
        template,
        {
            "posts": feed.posts,
            "error": None,
            "search": search or "",
            "selected_category": category or ALL_CATEGORIES,
        },
        session,
    )


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    session: Annotated[SessionContext, Depends(get_session_context)],
    feed_service: Annotated[FeedService, Depends(get_feed_service)],
    search: Annotated[str | None, Query()] = None,
    category: Annotated[str | None, Query()] = None,
):
    """Categorized feed of all posts."""
    return render_feed(request, "index.html", feed_service, session, search, category)


@router.get("/events", response_class=HTMLResponse)
def events(
    request: Request,
    session: Annotated[SessionContext, Depends(get_session_context)],
    feed_service: Annotated[FeedService, Depends(get_feed_service)],
    search: Annotated[str | None, Query()] = None,
    category: Annotated[str | None, Query()] = None,
):
    """Same feed as the index, rendered as the events page."""
    return render_feed(request, "events.html", feed_service, session, search, category)


@router.get("/post/{post_id}", response_class=HTMLResponse)
def post_detail(
    post_id: str,
    request: Request,
    session: Annotated[SessionContext, Depends(get_session_context)],
    feed_service: Annotated[FeedService, Depends(get_feed_service)],
):
    """Render a single post with its comments."""
    parsed_id = parse_post_id(post_id)
    if parsed_id is None:
        return render_error(
            request, POST_NOT_FOUND_MESSAGE, session, status_code=status.HTTP_404_NOT_FOUND
        )

    try:
        post = feed_service.get_post(parsed_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to load post {post_id}: {e}")
        return render_error(request, session=session)

    if post is None:
        return render_error(
            request, POST_NOT_FOUND_MESSAGE, session, status_code=status.HTTP_404_NOT_FOUND
        )

    return render(request, "post_detail.html", {"post": post}, session)
