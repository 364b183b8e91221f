"""
Read-side structures handed to the HTTP layer.

Posts come in two shapes: a TopLevelPost appears in the timeline and the
journal, a Reply only inside its parent's Thread. A Reply points at a
top-level post by id and has no replies of its own, so threads are never
deeper than one level.
"""
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Tuple, Union


@dataclass(frozen=True)
class TopLevelPost:
    id: int
    username: str
    content: str
    image_url: str
    kind: str
    created_at: Union[datetime, str]
    like_count: int = 0
    reply_count: int = 0
    tags: Tuple[str, ...] = ()

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class Reply:
    id: int
    parent_id: int
    username: str
    content: str
    image_url: str
    created_at: Union[datetime, str]
    like_count: int = 0

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class Thread:
    """A post followed by its direct replies, oldest first."""

    post: Union[TopLevelPost, Reply]
    replies: Tuple[Reply, ...] = ()

    def to_dict(self):
        return {
            "post": self.post.to_dict(),
            "replies": [reply.to_dict() for reply in self.replies],
        }


@dataclass(frozen=True)
class DayBucket:
    """Journal posts written on one numbered day."""

    day_number: int
    date_label: str
    posts: Tuple[TopLevelPost, ...] = field(default_factory=tuple)

    def to_dict(self):
        return {
            "day_number": self.day_number,
            "date_label": self.date_label,
            "posts": [post.to_dict() for post in self.posts],
        }

