"""Application use cases."""

from studio.application.use_cases.create_booking import BookingResult, CreateBookingUseCase
from studio.application.use_cases.create_inventory_item import (
    CreateInventoryItemUseCase,
    InventoryItemResult,
)
from studio.application.use_cases.delete_booking import (
    DeleteBookingResult,
    DeleteBookingUseCase,
)
from studio.application.use_cases.delete_inventory_item import (
    DeleteInventoryItemResult,
    DeleteInventoryItemUseCase,
)
from studio.application.use_cases.inventory_report import (
    InventoryReport,
    InventoryReportLine,
    InventoryReportUseCase,
)
from studio.application.use_cases.manage_cost_of_sale import ManageCostOfSaleUseCase
from studio.application.use_cases.record_purchase import RecordPurchaseUseCase
from studio.application.use_cases.reverse_purchase import ReversePurchaseUseCase
from studio.application.use_cases.update_booking import UpdateBookingUseCase
from studio.application.use_cases.update_inventory_item import UpdateInventoryItemUseCase
from studio.application.use_cases.update_settings import UpdateSettingsUseCase

__all__ = [
    "BookingResult",
    "CreateBookingUseCase",
    "UpdateBookingUseCase",
    "DeleteBookingResult",
    "DeleteBookingUseCase",
    "RecordPurchaseUseCase",
    "ReversePurchaseUseCase",
    "InventoryItemResult",
    "CreateInventoryItemUseCase",
    "UpdateInventoryItemUseCase",
    "DeleteInventoryItemResult",
    "DeleteInventoryItemUseCase",
    "ManageCostOfSaleUseCase",
    "UpdateSettingsUseCase",
    "InventoryReport",
    "InventoryReportLine",
    "InventoryReportUseCase",
]
