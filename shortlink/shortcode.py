"""Short URL encoding for autogenerated entries."""

import string

from .common.validators import SHORT_URL_PATTERN


class ShortCodeGenerator:
    """Derive short URLs from entry ids and back."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    def __init__(self, prefix: str = "_"):
        """Initialize short code generator.

        Args:
            prefix: Marker prepended to every autogenerated short URL

        Raises:
            ValueError: If the prefix is empty or uses characters a short URL
                may not contain
        """
        if not prefix or not SHORT_URL_PATTERN.fullmatch(prefix):
            raise ValueError(
                f"Invalid short URL prefix {prefix!r}: use letters, numbers, hyphens or underscores"
            )
        self.prefix = prefix

    def encode(self, entry_id: int) -> str:
        """Build the autogenerated short URL for an entry id.

        Args:
            entry_id: Non-negative entry id

        Returns:
            Prefixed base62 short URL
        """
        if entry_id < 0:
            raise ValueError(f"Entry id must be non-negative, got {entry_id}")
        return self.prefix + self._int_to_base62(entry_id)

    def decode(self, short_url: str) -> int:
        """Recover the entry id from an autogenerated short URL.

        Args:
            short_url: Short URL produced by encode()

        Returns:
            The entry id

        Raises:
            ValueError: If the short URL is not an autogenerated one
        """
        if not self.is_autogenerated(short_url):
            raise ValueError(f"'{short_url}' is not an autogenerated short URL")
        return self._base62_to_int(short_url[len(self.prefix):])

    def is_autogenerated(self, short_url: str) -> bool:
        """Check whether a short URL has the autogenerated shape."""
        body = short_url[len(self.prefix):] if short_url.startswith(self.prefix) else ""
        return bool(body) and all(c in self.BASE62_CHARS for c in body)

    def _int_to_base62(self, num: int) -> str:
        """Convert integer to base62 string.

        Args:
            num: Integer to convert

        Returns:
            Base62 string
        """
        if num == 0:
            return self.BASE62_CHARS[0]

        result = []
        base = len(self.BASE62_CHARS)

        while num > 0:
            remainder = num % base
            result.append(self.BASE62_CHARS[remainder])
            num = num // base

        return ''.join(reversed(result))

    def _base62_to_int(self, code: str) -> int:
        """Convert base62 string to integer.

        Args:
            code: Base62 string

        Returns:
            Integer value
        """
        result = 0
        base = len(self.BASE62_CHARS)

        for char in code:
            result = result * base + self.BASE62_CHARS.index(char)

        return result
