"""Validation utilities for the short-link directory."""

import re
from urllib.parse import urlparse
from typing import Tuple

# Top-level paths served by the web app itself
RESERVED_WORDS = frozenset({
    "api", "health", "admin", "static", "assets", "favicon",
    "robots", "sitemap", "stats",
})

MAX_URL_LENGTH = 2048
MAX_SHORT_URL_LENGTH = 75

SHORT_URL_PATTERN = re.compile(r'[a-zA-Z0-9_-]+')


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.
    
    Args:
        url: The URL to validate
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"
    
    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"
    
    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"
    
    if result.scheme not in ["http", "https"]:
        return False, "URL must use http or https protocol"
    
    if not result.netloc:
        return False, "URL must have a valid domain"
    
    return True, ""


def is_valid_short_url(
    short_url: str,
    min_length: int = 1,
    max_length: int = MAX_SHORT_URL_LENGTH,
) -> Tuple[bool, str]:
    """Validate a caller-chosen short URL.
    
    Args:
        short_url: The short URL to validate
        min_length: Minimum length
        max_length: Maximum length
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_url or not isinstance(short_url, str):
        return False, "Short URL is required"
    
    if len(short_url) < min_length:
        return False, f"Short URL must be at least {min_length} characters"
    
    if len(short_url) > max_length:
        return False, f"Short URL must be at most {max_length} characters"
    
    if not SHORT_URL_PATTERN.fullmatch(short_url):
        return False, "Short URL can only contain letters, numbers, hyphens, and underscores"
    
    if short_url.lower() in RESERVED_WORDS:
        return False, f"'{short_url}' is a reserved word and cannot be used"
    
    return True, ""
