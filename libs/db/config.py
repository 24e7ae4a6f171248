from sqlalchemy import Engine, create_engine, event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


def _use_explicit_sqlite_transactions(engine: Engine) -> None:
    """Make SQLite DDL and PRAGMA writes part of the surrounding transaction.

    The sqlite3/aiosqlite drivers commit ``CREATE TABLE`` on their own; turning
    off their transaction handling and emitting ``BEGIN`` ourselves keeps schema
    creation and seeding in one atomic unit.
    """

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_catalog_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """Create the async engine backing one catalog store."""
    engine = create_async_engine(database_url, echo=echo, future=True)
    if engine.dialect.name == "sqlite":
        _use_explicit_sqlite_transactions(engine.sync_engine)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory bound to ``engine``."""
    return async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


def create_sync_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Create a blocking engine for small side stores (e.g. the session flag)."""
    return create_engine(database_url, echo=echo, future=True)
