"""Feed query engine: filter, sort, resolve authors and group posts by category."""

import logging
from collections.abc import Iterable, Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from postboard.models.post import Post
from postboard.models.user import User
from postboard.schemas.feed import AuthorView, CategorizedFeed, CommentView, PostView

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"
FEED_ERROR_MESSAGE = "Error fetching posts"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def partition_by_category(posts: Iterable[PostView]) -> dict[str, list[PostView]]:
    """Group posts by category, keeping their incoming order within each group."""
    grouped: dict[str, list[PostView]] = {}
    for post in posts:
        grouped.setdefault(post.category, []).append(post)
    return grouped


class FeedService:
    """Builds the categorized feed and single-post views."""

    def __init__(self, db: Session):
        self.db = db

    def query_feed(self, search: str | None = None, category: str | None = None) -> CategorizedFeed:
        """Return matching posts grouped by category, newest first.

        A store failure is logged and produces an empty feed carrying an
        error message, so the page still renders.
        """
        try:
            posts = self._filtered_posts(search, category).all()
            views = self._build_views(posts)
        except SQLAlchemyError as e:
            logger.error(f"Feed query failed (search={search!r}, category={category!r}): {e}")
            return CategorizedFeed(posts={}, error=FEED_ERROR_MESSAGE)

        return CategorizedFeed(posts=partition_by_category(views))

    def get_post(self, post_id: int) -> PostView | None:
        """Return one enriched post, or None if it does not exist."""
        post = self.db.query(Post).filter(Post.id == post_id).first()
        if post is None:
            return None
        return self._build_views([post])[0]

    def _filtered_posts(self, search: str | None, category: str | None) -> Query:
        """Query for posts matching the search term and category filter."""
        query = self.db.query(Post)

        if search:
            if self.db.get_bind().dialect.name == "sqlite":
                # Fold both sides in Python so non-ASCII titles match too
                pattern = f"%{escape_like(search.casefold())}%"
                query = query.filter(func.casefold(Post.title).like(pattern, escape="\\"))
            else:
                query = query.filter(Post.title.ilike(f"%{escape_like(search)}%", escape="\\"))

        if category and category != ALL_CATEGORIES:
            query = query.filter(Post.category == category)

        return query.order_by(Post.created_at.desc(), Post.id.desc())

    def _build_views(self, posts: Sequence[Post]) -> list[PostView]:
        """Join posts against users and convert them to views."""
        user_ids = {post.user_id for post in posts}
        for post in posts:
            user_ids.update(comment.user_id for comment in post.comments)

        authors = self._resolve_authors(user_ids)
        return [self._to_view(post, authors) for post in posts]

    def _resolve_authors(self, user_ids: set[int]) -> dict[int, AuthorView]:
        """Load the referenced users in one query."""
        if not user_ids:
            return {}

        users = self.db.query(User).filter(User.id.in_(sorted(user_ids))).all()
        return {
            user.id: AuthorView(
                id=user.id,
                username=user.username,
                bio=user.bio,
                has_avatar=user.has_avatar,
            )
            for user in users
        }

    @staticmethod
    def _to_view(post: Post, authors: dict[int, AuthorView]) -> PostView:
        # Dangling references fall back to the default "unknown user" author
        unknown = AuthorView()
        return PostView(
            id=post.id,
            title=post.title,
            link=post.link,
            category=post.category,
            content=post.content,
            created_at=post.created_at,
            author=authors.get(post.user_id, unknown),
            like_user_ids=[reaction.user_id for reaction in post.likes],
            dislike_user_ids=[reaction.user_id for reaction in post.dislikes],
            comments=[
                CommentView(text=comment.text, author=authors.get(comment.user_id, unknown))
                for comment in post.comments
            ],
            has_image=post.has_image,
            has_poster=post.has_poster,
        )
