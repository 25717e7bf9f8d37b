"""Core interfaces (ports) for dependency injection."""

from studio.core.interfaces.booking_store import IBookingStore
from studio.core.interfaces.cost_of_sale_store import ICostOfSaleStore
from studio.core.interfaces.expense_store import IExpenseStore
from studio.core.interfaces.inventory_log_store import IInventoryLogStore
from studio.core.interfaces.inventory_store import IInventoryStore
from studio.core.interfaces.settings_store import ISettingsStore

__all__ = [
    "IBookingStore",
    "ICostOfSaleStore",
    "IExpenseStore",
    "IInventoryLogStore",
    "IInventoryStore",
    "ISettingsStore",
]
