"""Core business logic for the short-link directory."""

from .shortcode import ShortCodeGenerator
from .directory import ShortLinkDirectory
from .errors import ShortLinkError, AliasTakenError, NoSuchEntryError, StorageError

__all__ = [
    "ShortCodeGenerator",
    "ShortLinkDirectory",
    "ShortLinkError",
    "AliasTakenError",
    "NoSuchEntryError",
    "StorageError",
]
