"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from decimal import Decimal
from pathlib import Path

import pytest

from studio.config import reset_settings
from studio.core.entities.user import Caller, UserRole


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Point settings at a per-test data directory."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    reset_settings()
    yield
    reset_settings()


def _reset_store_singletons() -> None:
    import studio.infrastructure.storage.sqlite as sqlite_module

    sqlite_module._booking_store = None
    sqlite_module._inventory_store = None
    sqlite_module._inventory_log_store = None
    sqlite_module._cost_of_sale_store = None
    sqlite_module._expense_store = None
    sqlite_module._settings_store = None


@pytest.fixture
async def migrated_db(tmp_path: Path) -> AsyncGenerator[Path, None]:
    """Temporary database with every migration applied, wired as the global pool."""
    import studio.infrastructure.storage.sqlite.connection as conn_module
    from studio.infrastructure.storage.sqlite.connection import ConnectionPool, close_pool
    from studio.infrastructure.storage.sqlite.migrations.migrator import initialize_database

    db_path = tmp_path / "studio_test.db"
    await initialize_database(db_path, create_backup_before=False)

    await close_pool()
    conn_module._pool = ConnectionPool(db_path, pool_size=2, busy_timeout=5000)
    _reset_store_singletons()
    try:
        yield db_path
    finally:
        await close_pool()
        _reset_store_singletons()


@pytest.fixture
def staff() -> Caller:
    return Caller(id="staff-1", name="Priya", role=UserRole.STAFF)


@pytest.fixture
def admin() -> Caller:
    return Caller(id="admin-1", name="Asha", role=UserRole.ADMIN)


@pytest.fixture
def d():
    """Shorthand for exact decimals in assertions."""
    return Decimal
