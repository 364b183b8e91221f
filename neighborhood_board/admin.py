"""
Django admin configuration for neighborhood_board.

The admin is the moderation surface: posts can be edited or removed
here, everything else in the app only ever adds rows.
"""
from django.contrib import admin
from django.db.models import Count

from .models import Like, Post, PostTag, Tag


class PostTagInline(admin.TabularInline):
    """Inline for managing the tags on a post."""

    model = PostTag
    extra = 0
    raw_id_fields = ["tag"]


class ReplyInline(admin.TabularInline):
    """Replies shown under their top-level post."""

    model = Post
    fk_name = "parent"
    extra = 0
    fields = ["username", "content", "created_at"]
    readonly_fields = ["created_at"]
    show_change_link = True


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ["name", "post_count", "created_at"]
    search_fields = ["name"]
    readonly_fields = ["created_at"]


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = [
        "content_preview",
        "username",
        "post_type",
        "parent",
        "like_total",
        "created_at",
    ]
    list_filter = ["post_type", "created_at"]
    search_fields = ["content", "username"]
    raw_id_fields = ["parent"]
    date_hierarchy = "created_at"
    inlines = [PostTagInline, ReplyInline]

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(like_total=Count("likes", distinct=True))

    @admin.display(description="Content")
    def content_preview(self, obj):
        return str(obj)

    @admin.display(description="Likes", ordering="like_total")
    def like_total(self, obj):
        return obj.like_total


@admin.register(Like)
class LikeAdmin(admin.ModelAdmin):
    list_display = ["user", "post", "created_at"]
    raw_id_fields = ["user", "post"]
    readonly_fields = ["created_at"]
