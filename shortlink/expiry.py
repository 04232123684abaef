"""Scheduled removal of stale short links."""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Optional

from .directory import ShortLinkDirectory


def expiry_cutoff(now: datetime, retention_days: int) -> datetime:
    """Entries modified before the returned time are stale."""
    return now - timedelta(days=retention_days)


async def run_expiry_sweeps(
    directory: ShortLinkDirectory,
    retention_days: int,
    interval_seconds: float,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Periodically delete stale entries until cancelled.

    Each run goes through ShortLinkDirectory.expire_older_than, which never
    raises on storage failure, so one bad run does not end the loop.
    """
    logger = logger or logging.getLogger(__name__)
    logger.info(
        f"Expiry sweep every {interval_seconds}s, retention {retention_days} days"
    )

    while True:
        cutoff = expiry_cutoff(directory.clock(), retention_days)
        await directory.expire_older_than(cutoff)
        await asyncio.sleep(interval_seconds)
