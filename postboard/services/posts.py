"""Post creation and attachment retrieval."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from postboard.models.enums import PostMedia
from postboard.models.post import Post
from postboard.schemas.post import PostForm
from postboard.services.errors import PostboardError
from postboard.services.uploads import Attachment

logger = logging.getLogger(__name__)


class PostCreationError(PostboardError):
    """Raised when a new post could not be persisted."""


class PostService:
    """Service for creating posts and reading their attachments."""

    def __init__(self, db: Session):
        self.db = db

    def create_post(
        self,
        owner_id: int,
        form: PostForm,
        image: Attachment | None = None,
        poster: Attachment | None = None,
    ) -> Post:
        """Persist a new post owned by the given user.

        The owner id comes from the session and is not re-checked against
        the users table.
        """
        post = Post(
            title=form.title,
            link=form.link,
            category=form.category,
            content=form.content,
            user_id=owner_id,
            image_data=image.data if image else None,
            image_content_type=image.content_type if image else None,
            poster_data=poster.data if poster else None,
            poster_content_type=poster.content_type if poster else None,
        )
        self.db.add(post)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create post for user {owner_id}: {e}")
            raise PostCreationError("Internal server error") from e
        self.db.refresh(post)

        logger.info(f"Created post {post.id} in '{post.category}' for user {owner_id}")
        return post

    def get_media(self, post_id: int, media: PostMedia) -> Attachment | None:
        """Load one of a post's stored attachments, if present."""
        if media == PostMedia.IMAGE:
            data_column, type_column = Post.image_data, Post.image_content_type
        else:
            data_column, type_column = Post.poster_data, Post.poster_content_type

        row = self.db.query(data_column, type_column).filter(Post.id == post_id).first()
        if row is None or row[0] is None:
            return None
        return Attachment(data=row[0], content_type=row[1])
