"""Feed view schemas produced by the feed query engine."""

from datetime import datetime

from pydantic import BaseModel, Field

UNKNOWN_USERNAME = "unknown user"


class AuthorView(BaseModel):
    """Resolved user details shown next to posts and comments."""

    id: int | None = None
    username: str = UNKNOWN_USERNAME
    bio: str | None = None
    has_avatar: bool = False


class CommentView(BaseModel):
    """Comment with its resolved author."""

    text: str
    author: AuthorView


class PostView(BaseModel):
    """Post enriched with its owner and comment authors."""

    id: int
    title: str
    link: str | None
    category: str
    content: str
    created_at: datetime
    author: AuthorView
    like_user_ids: list[int] = Field(default_factory=list)
    dislike_user_ids: list[int] = Field(default_factory=list)
    comments: list[CommentView] = Field(default_factory=list)
    has_image: bool = False
    has_poster: bool = False

    @property
    def like_count(self) -> int:
        return len(self.like_user_ids)

    @property
    def dislike_count(self) -> int:
        return len(self.dislike_user_ids)


class CategorizedFeed(BaseModel):
    """Posts grouped by category, newest first within each group."""

    posts: dict[str, list[PostView]] = Field(default_factory=dict)
    error: str | None = None
