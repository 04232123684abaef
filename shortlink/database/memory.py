"""In-process storage for the short-link directory."""

import asyncio
import logging
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional

from ..errors import AliasTakenError, NoSuchEntryError
from .base import ShortLinkDBBase
from .models import ShortLinkEntry, as_utc


class ShortLinkMemoryDB(ShortLinkDBBase):
    """Dictionary-backed storage, used for development and tests.

    A single lock serializes every mutation, so the uniqueness check and the
    write it guards are atomic. Entries are copied on the way in and out.
    """

    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._entries: Dict[int, ShortLinkEntry] = {}
        self._last_id = 0
        self._lock = asyncio.Lock()

    async def next_id(self) -> int:
        async with self._lock:
            self._last_id += 1
            return self._last_id

    async def insert(self, entry: ShortLinkEntry) -> ShortLinkEntry:
        async with self._lock:
            if self._holder_of(entry.short_url) is not None:
                raise AliasTakenError(entry.short_url)
            self._entries[entry.id] = replace(entry)
            self._last_id = max(self._last_id, entry.id)
        self.logger.debug(f"Inserted entry {entry.id}: {entry.short_url}")
        return replace(entry)

    async def update(self, entry: ShortLinkEntry) -> ShortLinkEntry:
        async with self._lock:
            if entry.id not in self._entries:
                raise NoSuchEntryError(f"No entry with id {entry.id}", entry_id=entry.id)
            holder = self._holder_of(entry.short_url)
            if holder is not None and holder.id != entry.id:
                raise AliasTakenError(entry.short_url)
            self._entries[entry.id] = replace(entry)
        return replace(entry)

    async def find_by_id(self, entry_id: int) -> Optional[ShortLinkEntry]:
        entry = self._entries.get(entry_id)
        return replace(entry) if entry else None

    async def find_by_short_url(
        self,
        short_url: str,
        active: Optional[bool] = None,
    ) -> Optional[ShortLinkEntry]:
        entry = self._holder_of(short_url)
        if entry is None or (active is not None and entry.active != active):
            return None
        return replace(entry)

    async def find_by_original_url(
        self,
        original_url: str,
        autogenerated: bool,
        active: bool,
    ) -> List[ShortLinkEntry]:
        return [
            replace(e) for e in self._ordered()
            if e.original_url == original_url
            and e.autogenerated == autogenerated
            and e.active == active
        ]

    async def list_by_autogenerated(
        self,
        autogenerated: bool,
        start: int = 0,
        end: Optional[int] = None,
    ) -> List[ShortLinkEntry]:
        matching = [e for e in self._ordered() if e.autogenerated == autogenerated]
        return [replace(e) for e in matching[start:end]]

    async def delete_older_than(self, cutoff: datetime) -> int:
        cutoff = as_utc(cutoff)
        async with self._lock:
            stale = [i for i, e in self._entries.items() if e.modified_date < cutoff]
            for entry_id in stale:
                del self._entries[entry_id]
        return len(stale)

    async def count_entries(self) -> dict:
        entries = list(self._entries.values())
        return {
            "total": len(entries),
            "active": sum(1 for e in entries if e.active),
            "autogenerated": sum(1 for e in entries if e.autogenerated),
        }

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self._entries.clear()

    def _holder_of(self, short_url: str) -> Optional[ShortLinkEntry]:
        for entry in self._entries.values():
            if entry.short_url == short_url:
                return entry
        return None

    def _ordered(self) -> List[ShortLinkEntry]:
        return [self._entries[i] for i in sorted(self._entries)]
