"""
Service factory functions for dependency injection.

This module wires the SQLite stores to the core engine services. Use cases
and API dependencies import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from studio.config import get_settings
from studio.core.services import (
    AuditLog,
    CapacityChecker,
    InventoryConsumptionEngine,
    PurchaseReversal,
    WeightedAverageCostLedger,
)


# Opens one atomic unit of work; stores called inside it join it
TransactionFactory = Callable[[], AbstractAsyncContextManager[Any]]


async def get_capacity_checker() -> CapacityChecker:
    """Capacity checker over the booking and settings stores."""
    from studio.infrastructure.storage.sqlite import (
        get_booking_store,
        get_settings_store,
    )

    return CapacityChecker(
        booking_store=await get_booking_store(),
        settings_store=await get_settings_store(),
    )


async def get_cost_ledger() -> WeightedAverageCostLedger:
    """Purchase ledger writing to the configured cost-of-sale expense category."""
    from studio.infrastructure.storage.sqlite import (
        get_expense_store,
        get_inventory_log_store,
        get_inventory_store,
        get_settings_store,
    )

    return WeightedAverageCostLedger(
        inventory_store=await get_inventory_store(),
        log_store=await get_inventory_log_store(),
        expense_store=await get_expense_store(),
        settings_store=await get_settings_store(),
        expense_category=get_settings().inventory.cost_of_sale_category,
    )


async def get_consumption_engine() -> InventoryConsumptionEngine:
    """Consumption engine honouring the configured negative-stock policy."""
    from studio.infrastructure.storage.sqlite import (
        get_cost_of_sale_store,
        get_inventory_log_store,
        get_inventory_store,
    )

    return InventoryConsumptionEngine(
        inventory_store=await get_inventory_store(),
        log_store=await get_inventory_log_store(),
        cost_of_sale_store=await get_cost_of_sale_store(),
        allow_negative_stock=get_settings().inventory.allow_negative_stock,
    )


async def get_purchase_reversal() -> PurchaseReversal:
    from studio.infrastructure.storage.sqlite import (
        get_inventory_log_store,
        get_inventory_store,
    )

    return PurchaseReversal(
        inventory_store=await get_inventory_store(),
        log_store=await get_inventory_log_store(),
    )


async def get_audit_log() -> AuditLog:
    from studio.infrastructure.storage.sqlite import get_inventory_log_store

    return AuditLog(await get_inventory_log_store())


def get_default_transaction() -> TransactionFactory:
    """Transaction scope used by use cases when none is injected."""
    from studio.infrastructure.storage.sqlite import get_transaction

    return get_transaction
