"""Unit tests for SQLite connection pool and ambient transactions."""

from pathlib import Path

import pytest

from studio.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    get_connection,
    get_transaction,
)


class TestConnectionPoolInit:
    """Tests for ConnectionPool initialization."""

    def test_defaults(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path)
        assert pool.db_path == temp_db_path
        assert pool.pool_size == 5
        assert pool.busy_timeout == 30000
        assert pool._initialized is False
        assert len(pool._connections) == 0

    async def test_initialize_creates_directory_and_connections(self, tmp_path: Path):
        db_path = tmp_path / "subdir" / "nested" / "test.db"
        pool = ConnectionPool(db_path, pool_size=3)

        await pool.initialize()
        try:
            assert db_path.parent.exists()
            assert len(pool._connections) == 3
            assert pool._pool.qsize() == 3
        finally:
            await pool.close()

        assert pool._initialized is False

    async def test_connections_enforce_foreign_keys(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.acquire() as conn:
                cursor = await conn.execute("PRAGMA foreign_keys")
                assert (await cursor.fetchone())[0] == 1
        finally:
            await pool.close()


class TestPoolTransaction:
    async def test_commits_on_success(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.transaction() as conn:
                await conn.execute("CREATE TABLE t (v INTEGER)")
                await conn.execute("INSERT INTO t VALUES (1)")
            async with pool.acquire() as conn:
                cursor = await conn.execute("SELECT COUNT(*) FROM t")
                assert (await cursor.fetchone())[0] == 1
        finally:
            await pool.close()

    async def test_rolls_back_on_error(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.transaction() as conn:
                await conn.execute("CREATE TABLE t (v INTEGER)")

            with pytest.raises(RuntimeError):
                async with pool.transaction() as conn:
                    await conn.execute("INSERT INTO t VALUES (1)")
                    raise RuntimeError("boom")

            async with pool.acquire() as conn:
                cursor = await conn.execute("SELECT COUNT(*) FROM t")
                assert (await cursor.fetchone())[0] == 0
        finally:
            await pool.close()


class TestAmbientTransaction:
    async def test_nested_calls_share_one_connection(self, migrated_db):
        async with get_transaction() as outer:
            async with get_transaction() as inner:
                assert inner is outer
            async with get_connection() as reader:
                assert reader is outer

    async def test_inner_failure_rolls_back_outer_work(self, migrated_db):
        with pytest.raises(ValueError):
            async with get_transaction() as conn:
                await conn.execute(
                    "INSERT INTO expense_categories (name) VALUES ('Rent')"
                )
                async with get_transaction():
                    raise ValueError("inner failure")

        async with get_connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM expense_categories")
            assert (await cursor.fetchone())[0] == 0

    async def test_reads_inside_see_uncommitted_writes(self, migrated_db):
        async with get_transaction() as conn:
            await conn.execute("INSERT INTO expense_categories (name) VALUES ('Rent')")
            async with get_connection() as reader:
                cursor = await reader.execute("SELECT COUNT(*) FROM expense_categories")
                assert (await cursor.fetchone())[0] == 1
