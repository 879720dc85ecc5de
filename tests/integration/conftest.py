import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from fundintake.config.settings import Settings
from fundintake.database.connection import close_pool, get_connection, init_pool
from fundintake.drafts.postgres_store import PostgresDraftStore


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "pitchfund_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute("SELECT 1")
    except Exception as e:
        close_pool()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a scratch database"
        )
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def draft_store(integration_pool: None) -> Generator[PostgresDraftStore, None, None]:
    store = PostgresDraftStore()
    store.ensure_table()
    keys: list[str] = []
    original_set = store.set

    def tracking_set(key: str, payload: str) -> None:
        keys.append(key)
        original_set(key, payload)

    store.set = tracking_set  # type: ignore[method-assign]
    yield store
    for key in keys:
        store.remove(key)
