"""Common utilities for the short-link directory."""

from .validators import is_valid_url, is_valid_short_url
from .headers import extract_forwarded_headers, build_base_url, resolve_path_prefix
from .url_builder import build_short_link
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "is_valid_short_url",
    "extract_forwarded_headers",
    "build_base_url",
    "resolve_path_prefix",
    "build_short_link",
    "setup_logging",
    "get_logger",
]
