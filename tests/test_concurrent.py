"""Tests that concurrent requests keep short URLs unique.

Uniqueness is enforced by the storage backend, so concurrent creates that
race past the directory's pre-check still end with one holder per short URL.
"""

import asyncio
import pytest
from httpx import ASGITransport, AsyncClient

from web_app import create_app
from config import Config


@pytest.fixture
async def client(test_db, directory, logger):
    """Create test client."""
    app = create_app(
        db_instance=test_db,
        directory_instance=directory,
        config=Config(database_url="memory://", base_url="http://testserver"),
        logger=logger,
    )
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


class TestConcurrentRequests:
    """Many simultaneous requests."""

    async def test_concurrent_autogenerated_creates(self, client):
        """Different URLs created at once all get distinct short URLs."""
        concurrency = 30
        urls = [f"https://example.com/page_{i}" for i in range(concurrency)]
        responses = await asyncio.gather(
            *(client.post("/api/links", json={"url": url}) for url in urls),
            return_exceptions=True,
        )

        short_urls = []
        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 200, f"Request {i}: status {r.status_code} body={r.text}"
            assert r.json()["original_url"] == urls[i]
            short_urls.append(r.json()["short_url"])

        assert len(short_urls) == len(set(short_urls)), "All short URLs must be unique under concurrency"

    async def test_concurrent_explicit_same_short_url(self, client):
        """Only one of many requests for the same short URL wins."""
        concurrency = 20
        responses = await asyncio.gather(
            *(
                client.post(
                    "/api/links",
                    json={"url": f"https://example.com/{i}", "short_url": "contested"},
                )
                for i in range(concurrency)
            ),
            return_exceptions=True,
        )

        statuses = sorted(r.status_code for r in responses)
        assert statuses.count(200) == 1
        assert statuses.count(409) == concurrency - 1

    async def test_concurrent_redirects(self, client):
        """Many redirects for one short URL all succeed."""
        await client.post(
            "/api/links",
            json={"url": "https://example.com/redirect-target", "short_url": "hot"},
        )

        responses = await asyncio.gather(
            *(client.get("/hot", follow_redirects=False) for _ in range(20))
        )

        for r in responses:
            assert r.status_code == 302
            assert r.headers["location"] == "https://example.com/redirect-target"
