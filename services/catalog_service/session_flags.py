"""Durable key/value flags kept outside the catalog database.

Plays the role of browser local storage: a tiny table in its own SQLite
file, read and written synchronously.
"""

from typing import Optional

from sqlalchemy import Column, Engine, MetaData, String, Table, delete, insert, select

metadata = MetaData()

local_storage = Table(
    "local_storage",
    metadata,
    Column("key", String(100), primary_key=True),
    Column("value", String(255), nullable=False),
)


class SessionFlagStore:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._schema_ready = False

    def _ensure_schema(self) -> None:
        if not self._schema_ready:
            metadata.create_all(self._engine)
            self._schema_ready = True

    def get(self, key: str) -> Optional[str]:
        self._ensure_schema()
        with self._engine.connect() as conn:
            return conn.execute(
                select(local_storage.c.value).where(local_storage.c.key == key)
            ).scalar_one_or_none()

    def set(self, key: str, value: str) -> None:
        self._ensure_schema()
        with self._engine.begin() as conn:
            conn.execute(delete(local_storage).where(local_storage.c.key == key))
            conn.execute(insert(local_storage).values(key=key, value=value))

    def remove(self, key: str) -> None:
        self._ensure_schema()
        with self._engine.begin() as conn:
            conn.execute(delete(local_storage).where(local_storage.c.key == key))

    def close(self) -> None:
        self._engine.dispose()
