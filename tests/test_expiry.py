"""Tests for the expiry sweep and its failure handling."""

import asyncio
import logging
import pytest
from datetime import datetime, timedelta, timezone

from shortlink.database.memory import ShortLinkMemoryDB
from shortlink.directory import ShortLinkDirectory
from shortlink.errors import StorageError
from shortlink.expiry import expiry_cutoff, run_expiry_sweeps


class BrokenDB(ShortLinkMemoryDB):
    """Memory store whose reads and deletes fail."""

    async def delete_older_than(self, cutoff):
        raise StorageError("connection lost")

    async def find_by_short_url(self, short_url, active=None):
        raise StorageError("connection lost")


@pytest.fixture
def broken_directory(logger, clock):
    return ShortLinkDirectory(db=BrokenDB(logger=logger), logger=logger, clock=clock)


class TestStorageFailures:
    """The sweep swallows storage failures, everything else propagates them."""

    async def test_sweep_logs_and_swallows(self, broken_directory, clock, caplog):
        with caplog.at_level(logging.ERROR, logger="shortlink"):
            deleted = await broken_directory.expire_older_than(clock.now)

        assert deleted == 0
        assert "Unable to remove old short links" in caplog.text

    async def test_resolve_propagates(self, broken_directory):
        with pytest.raises(StorageError):
            await broken_directory.resolve("anything")

    async def test_create_propagates(self, broken_directory):
        with pytest.raises(StorageError):
            await broken_directory.create_explicit("https://example.com", "anything")


class TestExpirySchedule:
    """Periodic sweeps."""

    def test_expiry_cutoff(self):
        now = datetime(2024, 3, 31, tzinfo=timezone.utc)
        assert expiry_cutoff(now, 30) == datetime(2024, 3, 1, tzinfo=timezone.utc)

    async def test_periodic_sweep_removes_stale_entries(self, directory, clock):
        stale = await directory.create_explicit("https://example.com/stale", "stale")
        clock.advance(days=40)
        fresh = await directory.create_explicit("https://example.com/fresh", "fresh")

        task = asyncio.create_task(
            run_expiry_sweeps(directory, retention_days=30, interval_seconds=0.01)
        )
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        remaining = await directory.list_by_kind(False)
        assert [e.id for e in remaining] == [fresh.id]
        assert stale.id not in {e.id for e in remaining}

    async def test_periodic_sweep_survives_failures(self, broken_directory):
        task = asyncio.create_task(
            run_expiry_sweeps(broken_directory, retention_days=30, interval_seconds=0.01)
        )
        await asyncio.sleep(0.05)

        assert not task.done()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
