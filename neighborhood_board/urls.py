"""
URL configuration for django-neighborhood-board.

Include in your project urls.py:

    path('board/', include('neighborhood_board.urls')),
"""
from django.urls import path

from . import views

app_name = "neighborhood_board"

urlpatterns = [
    # Reading
    path("", views.TimelineView.as_view(), name="timeline"),
    path("thread/", views.ThreadView.as_view(), name="thread_lookup"),
    path("thread/<int:pk>/", views.ThreadView.as_view(), name="thread"),
    path("journal/", views.JournalView.as_view(), name="journal"),

    # Writing
    path("post/", views.PostCreateView.as_view(), name="post_create"),
    path("journal/post/", views.JournalPostCreateView.as_view(), name="journal_post_create"),
    path("post/<int:pk>/tags/", views.TagAttachView.as_view(), name="tag_attach"),

    # Interactions
    path("post/<int:pk>/like/", views.LikeToggleView.as_view(), name="like_toggle"),

    # Images
    path("upload/", views.ImageUploadView.as_view(), name="image_upload"),
]
