"""Post model with its reactions and comments."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, LargeBinary, String, Text
from sqlalchemy.orm import deferred, relationship

from postboard.database import Base
from postboard.models.enums import ReactionKind
from postboard.models.mixins import utc_now


class Post(Base):
    """Post model, immutable once created."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    link = Column(String(2048), nullable=True)
    category = Column(String(255), nullable=False, index=True)
    content = Column(Text, nullable=False)
    # Plain reference; owners are resolved at read time and may be missing.
    user_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False, index=True)
    image_data = deferred(Column(LargeBinary, nullable=True))
    image_content_type = Column(String(255), nullable=True)
    poster_data = deferred(Column(LargeBinary, nullable=True))
    poster_content_type = Column(String(255), nullable=True)

    # Relationships
    reactions = relationship(
        "PostReaction",
        back_populates="post",
        order_by="PostReaction.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    comments = relationship(
        "Comment",
        back_populates="post",
        order_by="Comment.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def likes(self) -> list["PostReaction"]:
        """Like reactions in the order they were left."""
        return [r for r in self.reactions if r.kind == ReactionKind.LIKE.value]

    @property
    def dislikes(self) -> list["PostReaction"]:
        """Dislike reactions in the order they were left."""
        return [r for r in self.reactions if r.kind == ReactionKind.DISLIKE.value]

    @property
    def has_image(self) -> bool:
        return self.image_content_type is not None

    @property
    def has_poster(self) -> bool:
        return self.poster_content_type is not None


class PostReaction(Base):
    """A like or dislike; the same user may react more than once."""

    __tablename__ = "post_reactions"

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    kind = Column(String(20), nullable=False)  # 'like', 'dislike'

    post = relationship("Post", back_populates="reactions")


class Comment(Base):
    """Comment left on a post."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    text = Column(Text, nullable=False)

    post = relationship("Post", back_populates="comments")
