"""Business logic for the short-link directory."""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from .shortcode import ShortCodeGenerator
from .database.base import ShortLinkDBBase
from .database.models import ShortLinkEntry, as_utc
from .errors import AliasTakenError, NoSuchEntryError, StorageError
from .common.validators import is_valid_url, is_valid_short_url


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ShortLinkDirectory:
    """Create, resolve, update and expire short-link entries.

    Uniqueness of short URLs is ultimately enforced by the storage backend.
    The directory checks first so that the common case fails before an id
    is spent, and relies on the backend to reject concurrent duplicates.
    """

    def __init__(
        self,
        db: ShortLinkDBBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the directory.

        Args:
            db: Storage backend
            short_code_generator: Encoder for autogenerated short URLs
            logger: Optional logger
            clock: Returns the current time; defaults to UTC now
        """
        self.db = db
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock or utc_now

    async def create_autogenerated(self, original_url: str) -> ShortLinkEntry:
        """Shorten a URL with a short URL derived from the new entry's id.

        An active autogenerated entry for the same original URL is reused
        instead of creating a second one.

        Args:
            original_url: The original long URL

        Returns:
            The new or reused entry

        Raises:
            ValueError: If the URL is invalid
            AliasTakenError: If the derived short URL is already held
        """
        self._validate_url(original_url)

        existing = await self.db.find_by_original_url(original_url, autogenerated=True, active=True)
        if existing:
            self.logger.debug(f"Reusing entry {existing[0].id} for {original_url}")
            return existing[0]

        entry_id = await self.db.next_id()
        short_url = self.generator.encode(entry_id)

        if await self.db.short_url_exists(short_url):
            raise AliasTakenError(short_url)

        entry = await self._insert(entry_id, original_url, short_url, autogenerated=True)
        self.logger.info(f"Created autogenerated short URL: {short_url} -> {original_url}")
        return entry

    async def create_explicit(self, original_url: str, short_url: str) -> ShortLinkEntry:
        """Shorten a URL with a caller-chosen short URL.

        Every call creates a new entry, even for an already shortened URL.
        A short URL already held by an entry is reported as taken before its
        format is checked.

        Raises:
            ValueError: If the URL or short URL is invalid
            AliasTakenError: If any entry, active or not, holds the short URL
        """
        self._validate_url(original_url)

        if await self.db.short_url_exists(short_url):
            raise AliasTakenError(short_url)

        self._validate_short_url(short_url)

        entry_id = await self.db.next_id()
        entry = await self._insert(entry_id, original_url, short_url, autogenerated=False)
        self.logger.info(f"Created short URL: {short_url} -> {original_url}")
        return entry

    async def resolve(self, short_url: str) -> ShortLinkEntry:
        """Get the active entry holding a short URL.

        Raises:
            NoSuchEntryError: If no active entry holds the short URL
        """
        entry = await self.db.find_by_short_url(short_url, active=True)
        if entry is None:
            self.logger.debug(f"Short URL not found: {short_url}")
            raise NoSuchEntryError(f"No active entry for short URL '{short_url}'", short_url=short_url)

        self.logger.debug(f"Resolved {short_url} -> {entry.original_url}")
        return entry

    async def get_entry(self, entry_id: int) -> ShortLinkEntry:
        """Get an entry by id, active or not.

        Raises:
            NoSuchEntryError: If no entry has this id
        """
        entry = await self.db.find_by_id(entry_id)
        if entry is None:
            raise NoSuchEntryError(f"No entry with id {entry_id}", entry_id=entry_id)
        return entry

    async def update_entry(
        self,
        entry_id: int,
        original_url: str,
        short_url: str,
        active: bool,
    ) -> ShortLinkEntry:
        """Replace an entry's original URL, short URL and active flag.

        The uniqueness check only runs when the short URL changes. On failure
        the stored entry is left as it was.

        Raises:
            ValueError: If the URL or the new short URL is invalid
            NoSuchEntryError: If no entry has this id
            AliasTakenError: If the new short URL is held by another entry
        """
        current = await self.get_entry(entry_id)
        self._validate_url(original_url)

        if current.short_url != short_url:
            if await self.db.short_url_exists(short_url):
                raise AliasTakenError(short_url)
            self._validate_short_url(short_url)

        updated = replace(
            current,
            original_url=original_url,
            short_url=short_url,
            active=active,
            modified_date=self.clock(),
        )
        entry = await self.db.update(updated)
        self.logger.info(f"Updated entry {entry_id}: {short_url} -> {original_url} (active={active})")
        return entry

    async def list_by_kind(
        self,
        autogenerated: bool,
        start: int = 0,
        end: Optional[int] = None,
    ) -> List[ShortLinkEntry]:
        """List autogenerated or explicit entries in the range [start, end).

        The order is ascending id, so repeated calls over unchanged data agree.
        """
        if start < 0:
            raise ValueError("start must be non-negative")
        if end is not None and end <= start:
            return []
        return await self.db.list_by_autogenerated(autogenerated, start, end)

    async def expire_older_than(self, cutoff: datetime) -> int:
        """Delete every entry not modified since cutoff.

        A naive cutoff is taken as UTC. Storage failures are logged and
        swallowed; the next scheduled run is the only recovery.

        Returns:
            Number of deleted entries, 0 on failure
        """
        cutoff = as_utc(cutoff)
        try:
            deleted = await self.db.delete_older_than(cutoff)
        except StorageError:
            self.logger.exception("Unable to remove old short links")
            return 0

        self.logger.info(f"Removed {deleted} short links not modified since {cutoff.isoformat()}")
        return deleted

    async def get_statistics(self) -> Dict[str, int]:
        """Get entry counts."""
        counts = await self.db.count_entries()
        return {
            "total_entries": counts["total"],
            "active_entries": counts["active"],
            "autogenerated_entries": counts["autogenerated"],
        }

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check."""
        db_healthy = await self.db.health_check()
        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Close storage connections."""
        await self.db.close()

    async def _insert(
        self,
        entry_id: int,
        original_url: str,
        short_url: str,
        autogenerated: bool,
    ) -> ShortLinkEntry:
        now = self.clock()
        entry = ShortLinkEntry(
            id=entry_id,
            original_url=original_url,
            short_url=short_url,
            autogenerated=autogenerated,
            active=True,
            create_date=now,
            modified_date=now,
        )
        return await self.db.insert(entry)

    @staticmethod
    def _validate_url(original_url: str) -> None:
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise ValueError(f"Invalid URL: {error}")

    @staticmethod
    def _validate_short_url(short_url: str) -> None:
        is_valid, error = is_valid_short_url(short_url)
        if not is_valid:
            raise ValueError(f"Invalid short URL: {error}")
