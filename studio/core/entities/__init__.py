"""Core domain entities."""

from studio.core.entities.app_settings import (
    AppSettings,
    ClassTiming,
    Currency,
)
from studio.core.entities.base import utc_now
from studio.core.entities.booking import (
    Booking,
    BookingStatus,
    BookingType,
    CapacityCheck,
    DayCapacity,
    SessionTime,
    SlotCapacity,
)
from studio.core.entities.expense import Expense, ExpenseCategory
from studio.core.entities.inventory import (
    CostOfSaleItem,
    InventoryItem,
    InventoryPriceHistory,
    InventorySummary,
)
from studio.core.entities.inventory_log import (
    AutoConsumedLog,
    CostSnapshot,
    CreatedLog,
    DeletedLog,
    InventoryAction,
    InventoryLog,
    ItemSnapshot,
    PriceChangedLog,
    StockAdjustedLog,
    StockSnapshot,
    UpdatedLog,
    inventory_log_adapter,
    is_booking_movement,
    is_purchase,
)
from studio.core.entities.user import Caller, UserRole

__all__ = [
    # Settings
    "AppSettings",
    "ClassTiming",
    "Currency",
    # Booking
    "Booking",
    "BookingStatus",
    "BookingType",
    "CapacityCheck",
    "DayCapacity",
    "SessionTime",
    "SlotCapacity",
    # Expense
    "Expense",
    "ExpenseCategory",
    # Inventory
    "CostOfSaleItem",
    "InventoryItem",
    "InventoryPriceHistory",
    "InventorySummary",
    # Audit log
    "AutoConsumedLog",
    "CostSnapshot",
    "CreatedLog",
    "DeletedLog",
    "InventoryAction",
    "InventoryLog",
    "ItemSnapshot",
    "PriceChangedLog",
    "StockAdjustedLog",
    "StockSnapshot",
    "UpdatedLog",
    "inventory_log_adapter",
    "is_booking_movement",
    "is_purchase",
    "utc_now",
    # Caller
    "Caller",
    "UserRole",
]
