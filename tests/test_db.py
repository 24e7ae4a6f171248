import pytest
from sqlalchemy import text

from libs.db.session import transaction


@pytest.mark.asyncio
async def test_db_connection(store):
    """
    Test that we can connect to the DB and execute a query.
    """
    async with transaction(store._sessions()) as session:
        result = await session.execute(text("SELECT 1"))
        assert result.scalar() == 1
