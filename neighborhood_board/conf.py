"""
Configuration settings for django-neighborhood-board.

Override these in your Django settings.py:

    NEIGHBORHOOD_BOARD = {
        'JOURNAL_EPOCH': '2025-06-01',
        'ALLOWED_IMAGE_TYPES': [...],
        ...
    }

To map the models onto prefixed tables, use:

    NEIGHBORHOOD_BOARD = {
        'TABLE_PREFIX': 'board_',  # board_posts, board_tags, ...
    }
"""
from django.conf import settings

DEFAULTS = {
    # Table names are "posts", "tags", "post_tags" and "likes" plus this prefix
    "TABLE_PREFIX": "",

    # Journal
    "JOURNAL_EPOCH": "2025-06-01",
    "JOURNAL_DATE_FORMAT": "F j, Y",

    # Tags
    "TAG_DELIMITER": ",",
    "TAG_MAX_LENGTH": 100,

    # Images
    "ALLOWED_IMAGE_TYPES": [
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/webp",
    ],
    "UPLOAD_PATH": "uploads/",
}


class BoardSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from neighborhood_board.conf import board_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid neighborhood_board setting: {name}")

        user_settings = getattr(settings, "NEIGHBORHOOD_BOARD", {})
        return user_settings.get(name, DEFAULTS[name])


board_settings = BoardSettings()


def get_table_name(name):
    """
    Get the database table name for a model.

    Args:
        name: base table name (e.g., 'posts', 'post_tags')

    Returns:
        Table name string with TABLE_PREFIX applied
    """
    return f"{board_settings.TABLE_PREFIX}{name}"
