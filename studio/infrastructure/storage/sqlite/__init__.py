"""SQLite storage implementations."""

from studio.infrastructure.storage.sqlite.booking_store import SQLiteBookingStore
from studio.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from studio.infrastructure.storage.sqlite.cost_of_sale_store import SQLiteCostOfSaleStore
from studio.infrastructure.storage.sqlite.expense_store import SQLiteExpenseStore
from studio.infrastructure.storage.sqlite.inventory_log_store import SQLiteInventoryLogStore
from studio.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from studio.infrastructure.storage.sqlite.settings_store import SQLiteSettingsStore

# Aliases used by the API lifespan
get_connection_pool = get_pool
close_connection_pool = close_pool

# Singleton instances
_booking_store: SQLiteBookingStore | None = None
_inventory_store: SQLiteInventoryStore | None = None
_inventory_log_store: SQLiteInventoryLogStore | None = None
_cost_of_sale_store: SQLiteCostOfSaleStore | None = None
_expense_store: SQLiteExpenseStore | None = None
_settings_store: SQLiteSettingsStore | None = None


async def get_booking_store() -> SQLiteBookingStore:
    """Get singleton booking store instance."""
    global _booking_store
    if _booking_store is None:
        _booking_store = SQLiteBookingStore()
    return _booking_store


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_inventory_log_store() -> SQLiteInventoryLogStore:
    """Get singleton inventory log store instance."""
    global _inventory_log_store
    if _inventory_log_store is None:
        _inventory_log_store = SQLiteInventoryLogStore()
    return _inventory_log_store


async def get_cost_of_sale_store() -> SQLiteCostOfSaleStore:
    """Get singleton cost-of-sale store instance."""
    global _cost_of_sale_store
    if _cost_of_sale_store is None:
        _cost_of_sale_store = SQLiteCostOfSaleStore()
    return _cost_of_sale_store


async def get_expense_store() -> SQLiteExpenseStore:
    """Get singleton expense store instance."""
    global _expense_store
    if _expense_store is None:
        _expense_store = SQLiteExpenseStore()
    return _expense_store


async def get_settings_store() -> SQLiteSettingsStore:
    """Get singleton settings store, seeded with the configured defaults."""
    global _settings_store
    if _settings_store is None:
        from studio.config import get_settings

        studio = get_settings().studio
        _settings_store = SQLiteSettingsStore(
            default_max_persons_per_class=studio.default_max_persons_per_class,
            default_currency=studio.default_currency,
        )
    return _settings_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Aliases for connection
    "get_connection_pool",
    "close_connection_pool",
    # Store classes
    "SQLiteBookingStore",
    "SQLiteCostOfSaleStore",
    "SQLiteExpenseStore",
    "SQLiteInventoryLogStore",
    "SQLiteInventoryStore",
    "SQLiteSettingsStore",
    # Factory functions
    "get_booking_store",
    "get_cost_of_sale_store",
    "get_expense_store",
    "get_inventory_log_store",
    "get_inventory_store",
    "get_settings_store",
]
