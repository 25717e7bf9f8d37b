"""
Domain exceptions for the studio application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class StudioError(Exception):
    """Base exception for all studio errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(StudioError):
    """Base exception for storage operations."""

    pass


class NotFoundError(StorageError):
    """Referenced record does not exist."""

    pass


class InventoryItemNotFoundError(NotFoundError):
    """Inventory item not found (or soft-deleted)."""

    def __init__(self, item_id: int):
        super().__init__(
            f"Inventory item not found: {item_id}",
            code="INVENTORY_ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


class InventoryLogNotFoundError(NotFoundError):
    """Inventory log entry not found."""

    def __init__(self, log_id: int):
        super().__init__(
            f"Inventory log not found: {log_id}",
            code="INVENTORY_LOG_NOT_FOUND",
            details={"log_id": log_id},
        )


class BookingNotFoundError(NotFoundError):
    """Booking not found."""

    def __init__(self, booking_id: int):
        super().__init__(
            f"Booking not found: {booking_id}",
            code="BOOKING_NOT_FOUND",
            details={"booking_id": booking_id},
        )


class CostOfSaleItemNotFoundError(NotFoundError):
    """Cost-of-sale configuration row not found."""

    def __init__(self, cos_id: int):
        super().__init__(
            f"Cost of sale item not found: {cos_id}",
            code="COST_OF_SALE_ITEM_NOT_FOUND",
            details={"cost_of_sale_id": cos_id},
        )


class CorruptAuditDataError(StorageError):
    """A stored audit snapshot could not be read back."""

    def __init__(self, log_id: int | None, reason: str):
        super().__init__(
            f"Corrupt audit data in log {log_id}: {reason}",
            code="CORRUPT_AUDIT_DATA",
            details={"log_id": log_id, "reason": reason},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Business rule rejections
class BusinessRuleError(StudioError):
    """Operation rejected by a business rule."""

    pass


class CapacityExceededError(BusinessRuleError):
    """Session does not have enough free spots for the requested party."""

    def __init__(
        self,
        requested: int,
        current_capacity: int,
        max_capacity: int,
    ):
        spots_remaining = max_capacity - current_capacity
        super().__init__(
            f"Cannot book {requested} people. Only {spots_remaining} spots remaining.",
            code="CAPACITY_EXCEEDED",
            details={
                "requested": requested,
                "current_capacity": current_capacity,
                "max_capacity": max_capacity,
                "spots_remaining": spots_remaining,
            },
        )


class InvalidOperationError(BusinessRuleError):
    """Operation is not valid for the target record."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            f"Cannot {operation}: {reason}",
            code="INVALID_OPERATION",
            details={"operation": operation, "reason": reason},
        )


class InsufficientStockError(BusinessRuleError):
    """Stock would drop below zero while negative stock is disabled."""

    def __init__(self, item_id: int, requested: Any, available: Any):
        super().__init__(
            f"Insufficient stock for item {item_id}: "
            f"requested {requested}, available {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "item_id": item_id,
                "requested": str(requested),
                "available": str(available),
            },
        )


class DuplicateCostOfSaleItemError(BusinessRuleError):
    """Item is already part of the cost-of-sale recipe."""

    def __init__(self, item_id: int):
        super().__init__(
            f"Inventory item {item_id} is already configured as a cost of sale item",
            code="DUPLICATE_COST_OF_SALE_ITEM",
            details={"item_id": item_id},
        )


# Validation Exceptions
class ValidationError(StudioError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Caller identity
class AuthenticationError(StudioError):
    """Request carries no caller identity."""

    def __init__(self, reason: str = "Authentication required"):
        super().__init__(reason, code="AUTHENTICATION_REQUIRED")


class PermissionDeniedError(StudioError):
    """Caller lacks the role required for the operation."""

    def __init__(self, action: str, required_role: str = "ADMIN"):
        super().__init__(
            f"Only {required_role.lower()} users can {action}",
            code="PERMISSION_DENIED",
            details={"action": action, "required_role": required_role},
        )


class ConfigurationError(StudioError):
    """Configuration error."""

    pass
