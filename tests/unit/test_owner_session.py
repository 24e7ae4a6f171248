"""Unit tests for the owner login gate and its session flag."""

import threading

import pytest
from services.catalog_service.session_flags import SessionFlagStore
from services.catalog_service.store import LocalCatalogStore
from sqlalchemy import create_engine


@pytest.mark.asyncio
@pytest.mark.unit
async def test_login_with_seeded_credentials(store):
    assert store.is_owner() is False

    assert await store.login_owner("owner", "s3cret") is True
    assert store.is_owner() is True


@pytest.mark.asyncio
@pytest.mark.unit
async def test_logout_clears_session(store):
    await store.login_owner("owner", "s3cret")

    store.logout_owner()

    assert store.is_owner() is False


@pytest.mark.asyncio
@pytest.mark.unit
async def test_logout_when_logged_out_is_harmless(store):
    store.logout_owner()

    assert store.is_owner() is False


@pytest.mark.asyncio
@pytest.mark.unit
@pytest.mark.parametrize(
    "username,password",
    [("owner", "wrong"), ("nobody", "s3cret"), ("owner", "S3CRET"), ("owner", "")],
)
async def test_bad_credentials_leave_logged_out_state(store, username, password):
    assert await store.login_owner(username, password) is False
    assert store.is_owner() is False


@pytest.mark.asyncio
@pytest.mark.unit
async def test_bad_credentials_do_not_log_out_active_session(store):
    await store.login_owner("owner", "s3cret")

    assert await store.login_owner("owner", "wrong") is False
    assert store.is_owner() is True


@pytest.mark.asyncio
@pytest.mark.unit
async def test_session_survives_store_restart(settings, clock):
    async with LocalCatalogStore(settings, clock=clock) as first:
        await first.login_owner("owner", "s3cret")

    async with LocalCatalogStore(settings, clock=clock) as second:
        assert second.is_owner() is True
        second.logout_owner()
        assert second.is_owner() is False


@pytest.mark.asyncio
@pytest.mark.unit
async def test_login_writes_session_flag_off_the_event_loop_thread(
    store, monkeypatch
):
    flags = store._session_flags
    write_set = flags.set
    threads = []

    def recording_set(key, value):
        threads.append(threading.current_thread())
        write_set(key, value)

    monkeypatch.setattr(flags, "set", recording_set)

    assert await store.login_owner("owner", "s3cret") is True
    assert threads and threads[0] is not threading.main_thread()
    assert store.is_owner() is True


@pytest.mark.unit
def test_session_flag_store_set_get_remove(tmp_path):
    flags = SessionFlagStore(create_engine(f"sqlite:///{tmp_path / 'flags.sqlite3'}"))

    assert flags.get("k") is None
    flags.set("k", "1")
    flags.set("k", "2")
    assert flags.get("k") == "2"
    flags.remove("k")
    assert flags.get("k") is None
    flags.close()
