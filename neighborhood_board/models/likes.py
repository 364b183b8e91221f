"""
Like model for django-neighborhood-board.
"""
import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DatabaseError as DjangoDatabaseError
from django.db import IntegrityError, models, transaction

from ..conf import get_table_name
from ..exceptions import DatabaseError, NotFound
from .posts import Post

logger = logging.getLogger(__name__)


class LikeState(models.TextChoices):
    LIKED = "liked", "Liked"
    UNLIKED = "unliked", "Unliked"


class Like(models.Model):
    """
    A user's like on a post.

    At most one row exists per (user, post); the unique constraint is what
    keeps concurrent toggles from double-liking.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="board_likes",
    )
    post = models.ForeignKey(
        "neighborhood_board.Post",
        on_delete=models.CASCADE,
        related_name="likes",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = get_table_name("likes")
        constraints = [
            models.UniqueConstraint(fields=["user", "post"], name="unique_user_post_like"),
        ]

    def __str__(self):
        return f"{self.user} likes post {self.post_id}"

    @classmethod
    def toggle(cls, user_id, post_id):
        """
        Like the post if the user has not, otherwise remove the like.

        The delete is a single statement, so of two racing toggles on a
        liked post only one removes the row. When nothing was deleted the
        insert runs in a savepoint; losing an insert race to another
        toggle leaves the post liked, which is what is reported.

        Raises:
            NotFound: unknown user or post
            DatabaseError: the delete or insert failed

        Returns:
            LikeState.LIKED or LikeState.UNLIKED
        """
        if user_id is None or not get_user_model().objects.filter(pk=user_id).exists():
            raise NotFound("User not found")
        if not Post.objects.filter(pk=post_id).exists():
            raise NotFound(f"Post {post_id} not found")

        try:
            deleted, _ = cls.objects.filter(user_id=user_id, post_id=post_id).delete()
            if deleted:
                return LikeState.UNLIKED

            try:
                with transaction.atomic():
                    cls.objects.create(user_id=user_id, post_id=post_id)
            except IntegrityError:
                logger.info(
                    "Concurrent like of post %s by user %s already recorded", post_id, user_id
                )
        except DjangoDatabaseError as exc:
            logger.exception("Failed to toggle like on post %s for user %s", post_id, user_id)
            raise DatabaseError(str(exc)) from exc
        return LikeState.LIKED

    @classmethod
    def count_for(cls, post_id):
        return cls.objects.filter(post_id=post_id).count()
