"""Pytest configuration and fixtures."""

import pytest
from datetime import datetime, timedelta, timezone

from shortlink.database.memory import ShortLinkMemoryDB
from shortlink.directory import ShortLinkDirectory
from shortlink.shortcode import ShortCodeGenerator
from shortlink.common.logging_config import setup_logging


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def test_db(logger):
    """Create in-memory database instance."""
    return ShortLinkMemoryDB(logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(prefix="_")


@pytest.fixture
def directory(test_db, short_code_generator, logger, clock) -> ShortLinkDirectory:
    """Create directory instance."""
    return ShortLinkDirectory(
        db=test_db,
        short_code_generator=short_code_generator,
        logger=logger,
        clock=clock,
    )


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
