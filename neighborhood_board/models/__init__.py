"""
Models for django-neighborhood-board.

All models are importable from neighborhood_board.models:

    from neighborhood_board.models import Post, Tag, PostTag, Like
"""
from .posts import Tag, PostTag, Post, parse_post_id, parse_tag_list
from .likes import Like, LikeState

__all__ = [
    # Posts
    "Tag",
    "PostTag",
    "Post",
    "parse_post_id",
    "parse_tag_list",
    # Likes
    "Like",
    "LikeState",
]
