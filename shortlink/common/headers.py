"""Proxy header handling for public short links."""

from typing import Dict, Optional


def extract_forwarded_headers(headers: Dict[str, str]) -> Dict[str, Optional[str]]:
    """Pull the X-Forwarded-* values that shape a public short link.

    Args:
        headers: Request headers dictionary

    Returns:
        Dictionary with forwarded_proto, forwarded_host, forwarded_prefix
    """
    # Header names are case-insensitive
    headers_lower = {k.lower(): v for k, v in headers.items()}

    return {
        "forwarded_proto": headers_lower.get("x-forwarded-proto"),
        "forwarded_host": headers_lower.get("x-forwarded-host"),
        "forwarded_prefix": headers_lower.get("x-forwarded-prefix"),
    }


def build_base_url(
    headers: Dict[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Work out the scheme and host that short links are served from.

    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host
    2. Request scheme + host
    3. Configured base URL

    Returns:
        Base URL without trailing slash (e.g., https://sho.rt)
    """
    forwarded = extract_forwarded_headers(headers)

    # Behind a proxy the client-facing origin is in the forwarded headers
    if forwarded["forwarded_proto"] and forwarded["forwarded_host"]:
        return f"{forwarded['forwarded_proto']}://{forwarded['forwarded_host']}"

    # Direct request
    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def resolve_path_prefix(headers: Dict[str, str], configured_prefix: str = "") -> str:
    """Path segment placed between the base URL and the short URL.

    A proxy that strips a mount point (X-Forwarded-Prefix: /s) wins over the
    configured prefix, since redirects are only reachable under that mount.

    Returns:
        Normalized prefix with a leading slash and no trailing one, or ''
    """
    forwarded = (extract_forwarded_headers(headers)["forwarded_prefix"] or "").strip().strip("/")
    prefix = forwarded or (configured_prefix or "").strip().strip("/")
    return f"/{prefix}" if prefix else ""
