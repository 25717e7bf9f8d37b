"""Storage infrastructure implementations."""

from studio.infrastructure.storage.sqlite import (
    SQLiteBookingStore,
    SQLiteCostOfSaleStore,
    SQLiteExpenseStore,
    SQLiteInventoryLogStore,
    SQLiteInventoryStore,
    SQLiteSettingsStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteBookingStore",
    "SQLiteCostOfSaleStore",
    "SQLiteExpenseStore",
    "SQLiteInventoryLogStore",
    "SQLiteInventoryStore",
    "SQLiteSettingsStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
