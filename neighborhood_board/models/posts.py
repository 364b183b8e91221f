"""
Post, Tag, and PostTag models for django-neighborhood-board.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError as DjangoDatabaseError
from django.db import models, transaction
from django.db.models import Count
from django.utils import timezone

from ..conf import board_settings, get_table_name
from ..exceptions import DatabaseError, InvalidInput, NotFound
from ..journal import bucket_by_day
from ..projections import Reply, Thread, TopLevelPost

logger = logging.getLogger(__name__)


def parse_tag_list(raw, delimiter=None):
    """Split a delimited tag string into trimmed, non-empty names."""
    if not raw:
        return []
    delimiter = delimiter or board_settings.TAG_DELIMITER
    return [name.strip() for name in raw.split(delimiter) if name.strip()]


def parse_post_id(value):
    """Return `value` as a post id, raising InvalidInput when malformed."""
    try:
        post_id = int(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"Invalid post ID: {value!r}")
    if post_id < 1:
        raise InvalidInput(f"Invalid post ID: {value!r}")
    return post_id


class TagManager(models.Manager):
    def resolve(self, name):
        """
        Return the tag called `name`, creating it on first use.

        `name` must already be trimmed and non-empty. A concurrent insert of
        the same name is absorbed by get_or_create, which re-reads the row
        after the unique constraint rejects the second insert.
        """
        tag, created = self.get_or_create(name=name)
        if created:
            logger.info("Created tag %r (id=%s)", name, tag.pk)
        return tag


class Tag(models.Model):
    """
    Flat tag for posts.

    Names are unique and case-sensitive as typed. Tags are created lazily
    and shared by every post that references them.
    """

    name = models.CharField(max_length=board_settings.TAG_MAX_LENGTH, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TagManager()

    class Meta:
        db_table = get_table_name("tags")
        ordering = ["name"]

    def __str__(self):
        return self.name

    @property
    def post_count(self):
        """Return count of posts carrying this tag."""
        return self.posts.count()


class PostTag(models.Model):
    """Association between a post and one of its tags."""

    post = models.ForeignKey(
        "neighborhood_board.Post",
        on_delete=models.CASCADE,
        related_name="post_tags",
    )
    tag = models.ForeignKey(
        Tag,
        on_delete=models.CASCADE,
        related_name="post_tags",
    )

    class Meta:
        db_table = get_table_name("post_tags")
        constraints = [
            models.UniqueConstraint(fields=["post", "tag"], name="unique_post_tag"),
        ]

    def __str__(self):
        return f"{self.tag} on post {self.post_id}"


class PostQuerySet(models.QuerySet):
    def top_level(self):
        return self.filter(parent__isnull=True)

    def journal(self):
        return self.filter(post_type=Post.JOURNAL)

    def regular(self):
        return self.exclude(post_type=Post.JOURNAL)

    def with_counts(self):
        """Annotate like_count and reply_count from the association rows."""
        return self.annotate(
            like_count=Count("likes", distinct=True),
            reply_count=Count("replies", distinct=True),
        )


class PostManager(models.Manager.from_queryset(PostQuerySet)):
    def create_post(self, username, content, image_url="", parent_id=None, kind="", tags=""):
        """
        Create a post or, when `parent_id` is set, a reply.

        Replies are always stored as regular posts and never receive tags.

        Raises:
            InvalidInput: empty content, unknown kind, or a reply to a reply
            DatabaseError: dangling parent or a failed write

        Returns:
            The new post's id
        """
        if not content or not content.strip():
            raise InvalidInput("Missing content")

        kind = kind or Post.REGULAR
        if kind not in Post.KINDS:
            raise InvalidInput(f"Unknown post type: {kind!r}")

        if parent_id is not None:
            parent = self.filter(pk=parent_id).values("parent_id").first()
            if parent is None:
                raise DatabaseError(f"Parent post {parent_id} does not exist")
            if parent["parent_id"] is not None:
                raise InvalidInput("Replies cannot be replied to")
            kind = Post.REGULAR

        try:
            with transaction.atomic():
                post = self.create(
                    username=username,
                    content=content,
                    image_url=image_url or "",
                    parent_id=parent_id,
                    post_type=kind,
                )
                if parent_id is None and tags:
                    post.attach_tags(tags)
        except DjangoDatabaseError as exc:
            logger.exception("Failed to create post for %s", username)
            raise DatabaseError(str(exc)) from exc

        return post.pk

    def get_timeline(self, exclude_journal=True):
        """
        Top-level posts, newest first.

        `exclude_journal=True` gives the regular timeline; False selects
        journal posts only.
        """
        qs = self.top_level()
        qs = qs.regular() if exclude_journal else qs.journal()
        qs = qs.with_counts().prefetch_related("tags").order_by("-created_at", "-id")
        return [post.as_top_level() for post in qs]

    def get_thread(self, post_id):
        """
        A post and its direct replies, oldest reply first.

        Raises:
            NotFound: no post has this id
        """
        post = self.with_counts().prefetch_related("tags").filter(pk=post_id).first()
        if post is None:
            raise NotFound(f"Post {post_id} not found")

        replies = (
            self.filter(parent_id=post.pk)
            .with_counts()
            .order_by("created_at", "id")
        )
        return Thread(
            post=post.as_projection(),
            replies=tuple(reply.as_reply() for reply in replies),
        )

    def get_journal(self, epoch=None):
        """Journal posts grouped into day buckets, most recent day first."""
        return bucket_by_day(self.get_timeline(exclude_journal=False), epoch=epoch)


class Post(models.Model):
    """
    Board post or reply.

    A post with a parent is a reply. Replies may only point at top-level
    posts. Like and reply counts are never stored; they are counted from
    the likes and replies rows when read.
    """

    REGULAR = "regular"
    JOURNAL = "journal"
    KINDS = (REGULAR, JOURNAL)
    POST_TYPE_CHOICES = [
        (REGULAR, "Regular"),
        (JOURNAL, "Journal"),
    ]

    username = models.CharField(max_length=150, db_index=True)
    content = models.TextField()
    image_url = models.CharField(max_length=255, blank=True, default="")
    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="replies",
        limit_choices_to={"parent__isnull": True},
    )
    post_type = models.CharField(
        max_length=20,
        choices=POST_TYPE_CHOICES,
        default=REGULAR,
    )
    tags = models.ManyToManyField(
        Tag,
        through=PostTag,
        related_name="posts",
        blank=True,
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    objects = PostManager()

    class Meta:
        db_table = get_table_name("posts")
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(
                fields=["parent", "post_type", "-created_at"],
                name="post_parent_type_created_idx",
            ),
        ]

    def __str__(self):
        return f"{self.content[:50]}..." if len(self.content) > 50 else self.content

    @property
    def is_reply(self):
        return self.parent_id is not None

    @property
    def is_journal(self):
        return self.post_type == self.JOURNAL

    def clean(self):
        if self.parent_id is None:
            return
        if self.parent_id == self.pk or Post.objects.filter(
            pk=self.parent_id, parent__isnull=False
        ).exists():
            raise ValidationError({"parent": "Replies may only answer top-level posts."})
        if self.pk is not None and Post.objects.filter(parent_id=self.pk).exists():
            raise ValidationError({"parent": "A post with replies cannot become a reply."})

    def attach_tags(self, raw_tags):
        """
        Attach every tag named in a delimited string to this post.

        Blank tokens are skipped, repeated names and tags the post already
        carries are ignored. Unknown names create new tags.

        All tags are attached in one transaction; a failed write leaves
        none of them attached.

        Raises:
            DatabaseError: a tag or association write failed

        Returns:
            List of tag names that were parsed from `raw_tags`
        """
        names = parse_tag_list(raw_tags)
        try:
            with transaction.atomic():
                for name in names:
                    tag = Tag.objects.resolve(name)
                    _, created = PostTag.objects.get_or_create(post=self, tag=tag)
                    if not created:
                        logger.debug("Post %s already tagged %r", self.pk, name)
        except DjangoDatabaseError as exc:
            logger.exception("Failed to tag post %s", self.pk)
            raise DatabaseError(str(exc)) from exc
        return names

    def tag_names(self):
        return tuple(tag.name for tag in self.tags.all())

    def as_top_level(self):
        return TopLevelPost(
            id=self.pk,
            username=self.username,
            content=self.content,
            image_url=self.image_url,
            kind=self.post_type,
            created_at=self.created_at,
            like_count=getattr(self, "like_count", 0),
            reply_count=getattr(self, "reply_count", 0),
            tags=self.tag_names(),
        )

    def as_reply(self):
        return Reply(
            id=self.pk,
            parent_id=self.parent_id,
            username=self.username,
            content=self.content,
            image_url=self.image_url,
            created_at=self.created_at,
            like_count=getattr(self, "like_count", 0),
        )

    def as_projection(self):
        return self.as_reply() if self.is_reply else self.as_top_level()
