"""
Image storage for post attachments.

Only MIME types listed in ALLOWED_IMAGE_TYPES are accepted. Files are
stored under UPLOAD_PATH with a random name that keeps the original
extension.
"""
import logging
import os
import posixpath
import secrets

from django.core.files.storage import default_storage

from .conf import board_settings
from .exceptions import InvalidInput

logger = logging.getLogger(__name__)


def is_allowed_image(content_type):
    """Check the upload's declared MIME type against the allow-list."""
    return content_type in board_settings.ALLOWED_IMAGE_TYPES


def generate_filename(original_filename):
    """Return 32 random hex characters plus the original file extension."""
    ext = os.path.splitext(original_filename or "")[1]
    return secrets.token_hex(16) + ext


def store_image(upload, storage=None):
    """
    Save an uploaded image.

    Args:
        upload: Django UploadedFile
        storage: Django storage backend, default_storage if None

    Raises:
        InvalidInput: the upload's content type is not an allowed image type

    Returns:
        (stored name, public URL)
    """
    content_type = getattr(upload, "content_type", "")
    if not is_allowed_image(content_type):
        raise InvalidInput(f"Invalid file type: {content_type or 'unknown'}")

    storage = storage or default_storage
    path = posixpath.join(board_settings.UPLOAD_PATH, generate_filename(upload.name))
    name = storage.save(path, upload)
    logger.info("Stored image %s (%s, %s bytes)", name, content_type, upload.size)
    return name, storage.url(name)


def save_image(upload, storage=None):
    """
    Store an image attached to a new post.

    A missing upload or one with a disallowed type gives the post no
    image rather than failing the post.

    Returns:
        (stored name, public URL), or ("", "") when nothing was stored
    """
    if upload is None:
        return "", ""
    try:
        return store_image(upload, storage=storage)
    except InvalidInput as exc:
        logger.warning("Ignoring image %r on post: %s", upload.name, exc)
        return "", ""


def delete_image(name, storage=None):
    """Remove a stored image whose post was rejected."""
    if not name:
        return
    storage = storage or default_storage
    storage.delete(name)
    logger.info("Removed image %s", name)
