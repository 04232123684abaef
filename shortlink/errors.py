"""Exceptions raised by the short-link directory and its storage backends."""

from typing import Optional


class ShortLinkError(Exception):
    """Base class for short-link errors."""


class AliasTakenError(ShortLinkError):
    """The requested short URL is already held by another entry."""

    def __init__(self, short_url: str):
        super().__init__(f"Short URL '{short_url}' is not unique")
        self.short_url = short_url


class NoSuchEntryError(ShortLinkError):
    """No entry matches the given id or active short URL."""

    def __init__(self, message: str, entry_id: Optional[int] = None, short_url: Optional[str] = None):
        super().__init__(message)
        self.entry_id = entry_id
        self.short_url = short_url


class StorageError(ShortLinkError):
    """The underlying storage failed."""
