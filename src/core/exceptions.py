"""
Exceptions used across layers.

NOTE: The chess rules themselves never raise. A move that is not legal is simply not played.
These errors live at the boundaries (requests, share links, persistence) and most of them get caught there as well.
"""


class GameError(Exception):
    """Base class for all errors raised by this application."""


class InvalidRequestError(GameError, ValueError):
    """Request data that cannot be interpreted (ValueError, so pydantic validation reports it)."""


class MalformedShareTokenError(GameError):
    """A single move token from a share link does not follow the '<file><rank>-<file><rank>' grammar."""


class CorruptedProgressRecordError(GameError):
    """The persisted progress record cannot be parsed."""


class RepositoryError(GameError):
    """The persistence layer failed to read or write."""
