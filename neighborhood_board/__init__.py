"""
django-neighborhood-board - A small social posting board for Django.

Features:
- Posts with optional image, tags and a journal flag
- Single-level reply threads
- Like/unlike toggle guarded by a uniqueness constraint
- Like and reply counts derived at read time
- Journal view grouped into numbered days since a fixed epoch
"""

__version__ = "0.1.0"
