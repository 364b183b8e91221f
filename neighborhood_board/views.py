"""
Views for django-neighborhood-board.

All responses are JSON; templates are left to the host project.
"""
import logging
import os

from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import JsonResponse
from django.shortcuts import redirect
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View

from .exceptions import BoardError, DatabaseError, InvalidInput, NotFound
from .identity import user_id_for_username, username_for_request
from .media import delete_image, save_image, store_image
from .models import Like, Post, parse_post_id

logger = logging.getLogger(__name__)

ERROR_STATUS = [
    (InvalidInput, 400),
    (NotFound, 404),
    (DatabaseError, 500),
]


def error_response(exc):
    """Translate a board error into a JSON error response."""
    for error_class, status in ERROR_STATUS:
        if isinstance(exc, error_class):
            break
    else:
        status = 500
    if status >= 500:
        logger.error("Request failed: %s", exc)
    return JsonResponse({"error": str(exc)}, status=status)


def wants_json(request):
    return request.headers.get("Accept") == "application/json"


class BoardErrorMixin:
    """Turn BoardError raised by a handler into a JSON error response."""

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except BoardError as exc:
            return error_response(exc)


class TimelineView(BoardErrorMixin, View):
    """Top-level regular posts, newest first."""

    def get(self, request):
        posts = Post.objects.get_timeline(exclude_journal=True)
        return JsonResponse({
            "username": username_for_request(request),
            "posts": [post.to_dict() for post in posts],
        })


class ThreadView(BoardErrorMixin, View):
    """A post with its replies, addressed by path or by ?id=."""

    def get(self, request, pk=None):
        if pk is None:
            raw_id = request.GET.get("id", "")
            if not raw_id:
                raise InvalidInput("Missing post ID")
            pk = parse_post_id(raw_id)

        thread = Post.objects.get_thread(pk)
        data = thread.to_dict()
        data["username"] = username_for_request(request)
        return JsonResponse(data)


class JournalView(BoardErrorMixin, View):
    """Journal posts grouped by day, most recent day first."""

    def get(self, request):
        buckets = Post.objects.get_journal()
        return JsonResponse({
            "username": username_for_request(request),
            "days": [bucket.to_dict() for bucket in buckets],
        })


class PostCreateView(LoginRequiredMixin, BoardErrorMixin, View):
    """Create a post, or a reply when parent_id is given."""

    post_type = None
    allow_replies = True

    def get_parent_id(self, request):
        raw_parent = request.POST.get("parent_id", "")
        if not self.allow_replies or not raw_parent:
            return None
        return parse_post_id(raw_parent)

    def get_post_type(self, request):
        return self.post_type or request.POST.get("post_type", "")

    def get_success_url(self, parent_id, post_type):
        if parent_id is not None:
            return reverse("neighborhood_board:thread", kwargs={"pk": parent_id})
        if post_type == Post.JOURNAL:
            return reverse("neighborhood_board:journal")
        return reverse("neighborhood_board:timeline")

    def post(self, request):
        content = request.POST.get("content", "")
        if not content.strip():
            raise InvalidInput("Missing content")

        parent_id = self.get_parent_id(request)
        post_type = self.get_post_type(request) or Post.REGULAR
        image_name, image_url = save_image(request.FILES.get("image"))

        try:
            post_id = Post.objects.create_post(
                username=username_for_request(request),
                content=content,
                image_url=image_url,
                parent_id=parent_id,
                kind=post_type,
                tags=request.POST.get("tags", ""),
            )
        except BoardError:
            delete_image(image_name)
            raise

        if wants_json(request):
            return JsonResponse({
                "id": post_id,
                "parent_id": parent_id,
                "post_type": Post.REGULAR if parent_id is not None else post_type,
                "image_url": image_url,
            }, status=201)

        return redirect(self.get_success_url(parent_id, post_type))


class JournalPostCreateView(PostCreateView):
    """Create a journal post."""

    post_type = Post.JOURNAL
    allow_replies = False


class TagAttachView(LoginRequiredMixin, BoardErrorMixin, View):
    """Attach a comma separated list of tags to a top-level post."""

    def post(self, request, pk):
        post = Post.objects.filter(pk=pk).first()
        if post is None:
            raise NotFound(f"Post {pk} not found")
        if post.is_reply:
            raise InvalidInput("Replies cannot be tagged")

        post.attach_tags(request.POST.get("tags", ""))
        return JsonResponse({"id": post.pk, "tags": list(post.tag_names())})


class LikeToggleView(LoginRequiredMixin, BoardErrorMixin, View):
    """Like or unlike a post for the current user."""

    def post(self, request, pk):
        user_id = user_id_for_username(username_for_request(request))
        state = Like.toggle(user_id, pk)

        if wants_json(request):
            return JsonResponse({
                "state": state.value,
                "like_count": Like.count_for(pk),
            })

        redirect_url = request.POST.get("redirect", "")
        if not url_has_allowed_host_and_scheme(
            redirect_url,
            allowed_hosts={request.get_host()},
            require_https=request.is_secure(),
        ):
            redirect_url = reverse("neighborhood_board:timeline")
        return redirect(redirect_url)


class ImageUploadView(LoginRequiredMixin, BoardErrorMixin, View):
    """Store an image and return its generated filename."""

    def post(self, request):
        upload = request.FILES.get("image")
        if upload is None:
            raise InvalidInput("Error retrieving file")

        name, url = store_image(upload)
        return JsonResponse({"filename": os.path.basename(name), "url": url})
