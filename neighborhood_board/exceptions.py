"""Errors raised by the board's content and engagement operations."""


class BoardError(Exception):
    """Base exception for board operations."""


class InvalidInput(BoardError):
    """Request data is unusable (empty content, malformed id, bad kind)."""


class NotFound(BoardError):
    """Referenced post or user does not exist."""


class DatabaseError(BoardError):
    """A write to the store failed and was not retried."""
