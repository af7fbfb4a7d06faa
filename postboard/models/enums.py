"""Enums for model fields."""

from enum import Enum


class ReactionKind(str, Enum):
    """Kinds of reaction a user can leave on a post."""

    LIKE = "like"
    DISLIKE = "dislike"


class PostMedia(str, Enum):
    """Binary attachments a post can carry."""

    IMAGE = "image"
    POSTER = "poster"
