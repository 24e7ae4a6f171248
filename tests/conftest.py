from typing import AsyncGenerator

import pytest
import pytest_asyncio

from libs.common.config import Settings
from services.catalog_service.store import LocalCatalogStore
from tests.factories import TickingClock


@pytest.fixture
def settings(tmp_path) -> Settings:
    """
    Settings pointing both databases at a per-test temporary directory.
    """
    return Settings(
        CATALOG_DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'catalog.sqlite3'}",
        SESSION_STORE_URL=f"sqlite:///{tmp_path / 'session.sqlite3'}",
        OWNER_USERNAME="owner",
        OWNER_PASSWORD="s3cret",
    )


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest_asyncio.fixture
async def store(settings, clock) -> AsyncGenerator[LocalCatalogStore, None]:
    """
    Yield an initialised store and close it after the test.
    """
    catalog = LocalCatalogStore(settings, clock=clock)
    await catalog.init()
    try:
        yield catalog
    finally:
        await catalog.close()
