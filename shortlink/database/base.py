"""Abstract base class for short-link storage implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List
from datetime import datetime

from .models import ShortLinkEntry


class ShortLinkDBBase(ABC):
    """Abstract base class for short-link database operations.

    Implementations must enforce short URL uniqueness themselves and raise
    AliasTakenError when an insert or update would create a second holder.
    Any other storage failure is raised as StorageError.
    """

    def __init__(self, db_config: str):
        """Initialize database connection.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def next_id(self) -> int:
        """Allocate the next entry id from a sequence shared by all callers."""
        pass

    @abstractmethod
    async def insert(self, entry: ShortLinkEntry) -> ShortLinkEntry:
        """Persist a new entry.

        Args:
            entry: Entry with an id obtained from next_id()

        Returns:
            The stored entry

        Raises:
            AliasTakenError: If the short URL is already held by any entry
        """
        pass

    @abstractmethod
    async def update(self, entry: ShortLinkEntry) -> ShortLinkEntry:
        """Overwrite an existing entry.

        Args:
            entry: Entry carrying the new field values

        Returns:
            The stored entry

        Raises:
            AliasTakenError: If the short URL is held by a different entry
            NoSuchEntryError: If no entry has this id
        """
        pass

    @abstractmethod
    async def find_by_id(self, entry_id: int) -> Optional[ShortLinkEntry]:
        """Get an entry by id, or None."""
        pass

    @abstractmethod
    async def find_by_short_url(
        self,
        short_url: str,
        active: Optional[bool] = None,
    ) -> Optional[ShortLinkEntry]:
        """Get the entry holding a short URL.

        Args:
            short_url: The short URL to look up
            active: Restrict to active (True) or inactive (False) entries; None matches both

        Returns:
            The matching entry or None
        """
        pass

    @abstractmethod
    async def find_by_original_url(
        self,
        original_url: str,
        autogenerated: bool,
        active: bool,
    ) -> List[ShortLinkEntry]:
        """List entries for an original URL with the given flags, ordered by id."""
        pass

    async def short_url_exists(self, short_url: str) -> bool:
        """Check if any entry, active or not, holds this short URL."""
        return await self.find_by_short_url(short_url) is not None

    @abstractmethod
    async def list_by_autogenerated(
        self,
        autogenerated: bool,
        start: int = 0,
        end: Optional[int] = None,
    ) -> List[ShortLinkEntry]:
        """List entries by kind in ascending id order.

        Args:
            autogenerated: Which kind of entries to return
            start: Lower bound of the range (inclusive)
            end: Upper bound of the range (exclusive); None for no bound

        Returns:
            The range of matching entries
        """
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete every entry whose modified_date is strictly before cutoff.

        Runs as a single batch in its own transaction.

        Returns:
            Number of deleted entries
        """
        pass

    @abstractmethod
    async def count_entries(self) -> dict:
        """Count entries.

        Returns:
            Dictionary with total, active and autogenerated counts
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close database connections."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if database is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass
