"""URL building utilities for the short-link directory."""


def build_short_link(
    short_url: str,
    base_url: str,
    path_prefix: str = "",
) -> str:
    """Build the complete public link for a short URL.
    
    Args:
        short_url: The short URL (alias)
        base_url: Base URL (e.g., https://example.com)
        path_prefix: Optional path prefix (e.g., /s)
        
    Returns:
        Complete link
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")
    
    if prefix:
        return f"{base}/{prefix}/{short_url}"
    return f"{base}/{short_url}"
