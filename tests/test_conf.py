"""
Tests for settings and identity helpers.
"""
import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import RequestFactory

from neighborhood_board.conf import board_settings, get_table_name
from neighborhood_board.identity import user_id_for_username, username_for_request
from neighborhood_board.models import Like, Post, PostTag, Tag


class TestBoardSettings:
    def test_defaults(self):
        assert board_settings.TAG_DELIMITER == ","
        assert board_settings.UPLOAD_PATH == "uploads/"

    def test_override(self, settings):
        settings.NEIGHBORHOOD_BOARD = {"JOURNAL_EPOCH": "2030-01-01"}
        assert board_settings.JOURNAL_EPOCH == "2030-01-01"

    def test_unknown_setting(self):
        with pytest.raises(AttributeError):
            board_settings.NOT_A_SETTING

    def test_table_names(self, settings):
        assert Post._meta.db_table == "posts"
        assert Tag._meta.db_table == "tags"
        assert PostTag._meta.db_table == "post_tags"
        assert Like._meta.db_table == "likes"

        settings.NEIGHBORHOOD_BOARD = {"TABLE_PREFIX": "board_"}
        assert get_table_name("posts") == "board_posts"


class TestIdentity:
    def test_username_for_request(self, db):
        user = get_user_model().objects.create_user(username="alice", password="pw")
        request = RequestFactory().get("/")
        request.user = user
        assert username_for_request(request) == "alice"

    def test_anonymous_request(self):
        request = RequestFactory().get("/")
        assert username_for_request(request) is None
        request.user = AnonymousUser()
        assert username_for_request(request) is None

    def test_user_id_for_username(self, db):
        user = get_user_model().objects.create_user(username="alice", password="pw")
        assert user_id_for_username("alice") == user.pk
        assert user_id_for_username("bob") is None
        assert user_id_for_username("") is None
