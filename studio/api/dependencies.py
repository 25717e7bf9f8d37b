"""
Dependency injection container for FastAPI.

Provides stores, services, use cases and the caller identity to route
handlers. Tests replace any of these through ``app.dependency_overrides``.
"""

from fastapi import Depends, Header

from studio.application.services import (
    get_audit_log,
    get_capacity_checker,
)
from studio.application.use_cases import (
    CreateBookingUseCase,
    CreateInventoryItemUseCase,
    DeleteBookingUseCase,
    DeleteInventoryItemUseCase,
    InventoryReportUseCase,
    ManageCostOfSaleUseCase,
    RecordPurchaseUseCase,
    ReversePurchaseUseCase,
    UpdateBookingUseCase,
    UpdateInventoryItemUseCase,
    UpdateSettingsUseCase,
)
from studio.core.entities.user import Caller, UserRole
from studio.core.exceptions import AuthenticationError, PermissionDeniedError
from studio.core.interfaces import IBookingStore, IInventoryStore, ISettingsStore
from studio.core.services import AuditLog, CapacityChecker
from studio.infrastructure.storage.sqlite import (
    get_booking_store,
    get_inventory_store,
    get_settings_store,
)


# Caller identity
def get_current_user(
    x_user_id: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Caller | None:
    """Caller from the identity headers, or None for anonymous reads."""
    if not x_user_id:
        return None
    try:
        role = UserRole(x_user_role.upper()) if x_user_role else UserRole.STAFF
    except ValueError:
        raise AuthenticationError(f"Unknown role: {x_user_role}") from None
    return Caller(id=x_user_id, name=x_user_name or None, role=role)


def require_user(user: Caller | None = Depends(get_current_user)) -> Caller:
    """Mutating endpoints need a known caller."""
    if user is None:
        raise AuthenticationError("X-User-Id header is required")
    return user


def require_admin(user: Caller = Depends(require_user)) -> Caller:
    if not user.is_admin:
        raise PermissionDeniedError("perform this action")
    return user


# Store dependencies
async def get_booking_repo() -> IBookingStore:
    """Get booking store."""
    return await get_booking_store()


async def get_inventory_repo() -> IInventoryStore:
    """Get inventory store."""
    return await get_inventory_store()


async def get_settings_repo() -> ISettingsStore:
    """Get settings store."""
    return await get_settings_store()


# Service dependencies
async def get_capacity() -> CapacityChecker:
    """Get capacity checker."""
    return await get_capacity_checker()


async def get_audit() -> AuditLog:
    """Get inventory audit log."""
    return await get_audit_log()


# Booking use case dependencies
def get_create_booking_use_case() -> CreateBookingUseCase:
    return CreateBookingUseCase()


def get_update_booking_use_case() -> UpdateBookingUseCase:
    return UpdateBookingUseCase()


def get_delete_booking_use_case() -> DeleteBookingUseCase:
    return DeleteBookingUseCase()


# Inventory use case dependencies
def get_create_inventory_item_use_case() -> CreateInventoryItemUseCase:
    return CreateInventoryItemUseCase()


def get_update_inventory_item_use_case() -> UpdateInventoryItemUseCase:
    return UpdateInventoryItemUseCase()


def get_delete_inventory_item_use_case() -> DeleteInventoryItemUseCase:
    return DeleteInventoryItemUseCase()


def get_record_purchase_use_case() -> RecordPurchaseUseCase:
    return RecordPurchaseUseCase()


def get_reverse_purchase_use_case() -> ReversePurchaseUseCase:
    return ReversePurchaseUseCase()


# Cost of sale, settings and report dependencies
def get_manage_cost_of_sale_use_case() -> ManageCostOfSaleUseCase:
    return ManageCostOfSaleUseCase()


def get_update_settings_use_case() -> UpdateSettingsUseCase:
    return UpdateSettingsUseCase()


def get_inventory_report_use_case() -> InventoryReportUseCase:
    return InventoryReportUseCase()
