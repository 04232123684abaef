"""Tests for the in-memory storage backend."""

import asyncio
import pytest
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from shortlink.database.memory import ShortLinkMemoryDB
from shortlink.database.models import ShortLinkEntry
from shortlink.errors import AliasTakenError, NoSuchEntryError


NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_entry(entry_id: int, short_url: str, **kwargs) -> ShortLinkEntry:
    fields = {
        "id": entry_id,
        "original_url": f"https://example.com/{entry_id}",
        "short_url": short_url,
        "autogenerated": False,
        "active": True,
        "create_date": NOW,
        "modified_date": NOW,
    }
    fields.update(kwargs)
    return ShortLinkEntry(**fields)


@pytest.fixture
def db(logger):
    return ShortLinkMemoryDB(logger=logger)


class TestShortLinkMemoryDB:
    """Storage-level guarantees."""

    async def test_next_id_is_monotonic(self, db):
        ids = [await db.next_id() for _ in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    async def test_concurrent_ids_are_unique(self, db):
        ids = await asyncio.gather(*(db.next_id() for _ in range(100)))
        assert len(set(ids)) == 100

    async def test_insert_rejects_duplicate_short_url(self, db):
        await db.insert(make_entry(1, "dup"))

        with pytest.raises(AliasTakenError):
            await db.insert(make_entry(2, "dup"))

        assert await db.find_by_id(2) is None

    async def test_concurrent_inserts_keep_one_holder(self, db):
        results = await asyncio.gather(
            *(db.insert(make_entry(i, "race")) for i in range(1, 11)),
            return_exceptions=True,
        )

        winners = [r for r in results if isinstance(r, ShortLinkEntry)]
        losers = [r for r in results if isinstance(r, AliasTakenError)]
        assert len(winners) == 1
        assert len(losers) == 9

    async def test_update_rejects_other_holder(self, db):
        await db.insert(make_entry(1, "a"))
        await db.insert(make_entry(2, "b"))

        with pytest.raises(AliasTakenError):
            await db.update(make_entry(1, "b"))

        assert (await db.find_by_id(1)).short_url == "a"

    async def test_update_missing(self, db):
        with pytest.raises(NoSuchEntryError):
            await db.update(make_entry(7, "ghost"))

    async def test_returned_entries_are_copies(self, db):
        stored = await db.insert(make_entry(1, "copy"))
        stored.active = False

        fetched = await db.find_by_id(1)
        fetched.short_url = "changed"

        assert (await db.find_by_id(1)).active
        assert await db.short_url_exists("copy")

    async def test_find_by_short_url_active_filter(self, db):
        await db.insert(make_entry(1, "off", active=False))

        assert await db.find_by_short_url("off") is not None
        assert await db.find_by_short_url("off", active=True) is None
        assert await db.find_by_short_url("off", active=False) is not None

    async def test_find_by_original_url(self, db):
        url = "https://example.com/same"
        await db.insert(make_entry(3, "c", original_url=url, autogenerated=True))
        await db.insert(make_entry(1, "a", original_url=url, autogenerated=True))
        await db.insert(make_entry(2, "b", original_url=url, autogenerated=True, active=False))

        found = await db.find_by_original_url(url, autogenerated=True, active=True)

        assert [e.id for e in found] == [1, 3]

    async def test_delete_older_than(self, db):
        await db.insert(make_entry(1, "old", modified_date=NOW - timedelta(days=2)))
        await db.insert(make_entry(2, "new", modified_date=NOW))

        assert await db.delete_older_than(NOW - timedelta(days=1)) == 1
        assert await db.find_by_id(1) is None
        assert await db.find_by_id(2) is not None

    async def test_delete_older_than_naive_cutoff(self, db):
        await db.insert(make_entry(1, "old", modified_date=NOW - timedelta(days=2)))

        assert await db.delete_older_than(datetime(2023, 12, 31, 12, 0)) == 1

    async def test_insert_with_explicit_id_advances_sequence(self, db):
        await db.insert(make_entry(10, "ten"))
        assert await db.next_id() == 11

    async def test_count_entries(self, db):
        await db.insert(make_entry(1, "a", autogenerated=True))
        await db.insert(replace(make_entry(2, "b"), active=False))

        assert await db.count_entries() == {"total": 2, "active": 1, "autogenerated": 1}
