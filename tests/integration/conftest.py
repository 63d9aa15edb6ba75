"""Shared fixtures for integration tests."""

import os
import uuid

import pytest
import pytest_asyncio

from laakhay.cosmos import CosmosClient

# Skip all integration tests unless RUN_LAAKHAY_COSMOS_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_LAAKHAY_COSMOS_TESTS") != "1",
    reason="Requires a live account. Set RUN_LAAKHAY_COSMOS_TESTS=1, COSMOS_URL and COSMOS_KEY to run",
)


@pytest_asyncio.fixture
async def live_client():
    url = os.environ.get("COSMOS_URL")
    key = os.environ.get("COSMOS_KEY")
    if not url or not key:
        pytest.skip("COSMOS_URL and COSMOS_KEY must be set")
    async with CosmosClient(url, master_key=key) as client:
        yield client


@pytest_asyncio.fixture
async def scratch_collection(live_client):
    """Fresh database and collection, deleted afterwards."""
    database = f"laakhay-it-{uuid.uuid4().hex[:8]}"
    collection = "items"
    await live_client.create_database(database)
    try:
        await live_client.create_collection(database, collection)
        yield database, collection
    finally:
        await live_client.delete_database(database)
