"""Post creation and stored media endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.responses import RedirectResponse, Response
from sqlalchemy.orm import Session

from postboard.api.dependencies import (
    SessionContext,
    get_post_service,
    parse_post_id,
    require_session,
)
from postboard.api.templating import render_error
from postboard.database import get_db
from postboard.models.enums import PostMedia
from postboard.schemas.post import PostForm
from postboard.services.auth import get_avatar
from postboard.services.posts import PostCreationError, PostService
from postboard.services.uploads import Attachment, read_attachment

logger = logging.getLogger(__name__)

router = APIRouter(tags=["posts"])


def attachment_response(attachment: Attachment | None, detail: str) -> Response:
    """Serve stored bytes with their declared content type, or 404."""
    if attachment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return Response(content=attachment.data, media_type=attachment.content_type)


@router.post("/create-post")
async def create_post(
    request: Request,
    session: Annotated[SessionContext, Depends(require_session)],
    form: Annotated[PostForm, Depends(PostForm.as_form)],
    post_service: Annotated[PostService, Depends(get_post_service)],
    image: Annotated[UploadFile | None, File()] = None,
    poster: Annotated[UploadFile | None, File()] = None,
):
    """Create a post owned by the signed-in user.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    image_attachment = await read_attachment(image)
    poster_attachment = await read_attachment(poster)

    try:
        post_service.create_post(
            session.user.id,
            form,
            image=image_attachment,
            poster=poster_attachment,
        )
    except PostCreationError as e:
        return render_error(request, str(e), session)

    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/post/{post_id}/{media}")
def post_media(
    post_id: str,
    media: PostMedia,
    post_service: Annotated[PostService, Depends(get_post_service)],
):
    """Serve a post's stored image or poster."""
    parsed_id = parse_post_id(post_id)
    if parsed_id is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    attachment = post_service.get_media(parsed_id, media)
    return attachment_response(attachment, f"No {media.value} stored")


@router.get("/users/{user_id}/avatar")
def user_avatar(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Serve a user's stored avatar."""
    return attachment_response(get_avatar(db, user_id), "No avatar stored")
