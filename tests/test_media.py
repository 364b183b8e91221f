"""
Tests for image storage.
"""
import re

import pytest
from django.core.files.storage import FileSystemStorage
from django.core.files.uploadedfile import SimpleUploadedFile

from neighborhood_board.exceptions import InvalidInput
from neighborhood_board.media import (
    delete_image,
    generate_filename,
    is_allowed_image,
    save_image,
    store_image,
)


@pytest.fixture
def storage(tmp_path):
    return FileSystemStorage(location=str(tmp_path), base_url="/uploads-root/")


def upload(name="cat.jpg", content_type="image/jpeg"):
    return SimpleUploadedFile(name, b"fake image bytes", content_type=content_type)


class TestAllowList:
    @pytest.mark.parametrize(
        "content_type",
        ["image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"],
    )
    def test_allowed(self, content_type):
        assert is_allowed_image(content_type)

    @pytest.mark.parametrize("content_type", ["image/svg+xml", "text/html", "", None])
    def test_rejected(self, content_type):
        assert not is_allowed_image(content_type)

    def test_allow_list_from_settings(self, settings):
        settings.NEIGHBORHOOD_BOARD = {"ALLOWED_IMAGE_TYPES": ["image/png"]}
        assert is_allowed_image("image/png")
        assert not is_allowed_image("image/jpeg")


class TestFilename:
    def test_keeps_extension(self):
        assert re.fullmatch(r"[0-9a-f]{32}\.jpeg", generate_filename("holiday.jpeg"))

    def test_no_extension(self):
        assert re.fullmatch(r"[0-9a-f]{32}", generate_filename("holiday"))

    def test_unique(self):
        assert generate_filename("a.png") != generate_filename("a.png")


class TestStoreImage:
    def test_store(self, storage, tmp_path):
        name, url = store_image(upload(), storage=storage)

        assert name.startswith("uploads/")
        assert name.endswith(".jpg")
        assert url == "/uploads-root/" + name
        assert (tmp_path / name).read_bytes() == b"fake image bytes"

    def test_store_rejects_type(self, storage, tmp_path):
        with pytest.raises(InvalidInput):
            store_image(upload("x.html", "text/html"), storage=storage)
        assert not (tmp_path / "uploads").exists()

    def test_save_image_none(self, storage):
        assert save_image(None, storage=storage) == ("", "")

    def test_save_image_ignores_bad_type(self, storage):
        assert save_image(upload("x.html", "text/html"), storage=storage) == ("", "")

    def test_save_image_returns_name_and_url(self, storage):
        name, url = save_image(upload(), storage=storage)
        assert name.startswith("uploads/")
        assert url == "/uploads-root/" + name

    def test_delete_image(self, storage, tmp_path):
        name, _ = store_image(upload(), storage=storage)
        delete_image(name, storage=storage)
        assert not (tmp_path / name).exists()

    def test_delete_nothing(self, storage):
        delete_image("", storage=storage)
