"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
Decimal amounts serialize as strings so no precision is lost.
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from studio.core.entities.app_settings import AppSettings
from studio.core.entities.booking import Booking, CapacityCheck, DayCapacity
from studio.core.entities.inventory import (
    CostOfSaleItem,
    InventoryItem,
    InventoryPriceHistory,
)
from studio.core.entities.inventory_log import InventoryLog, StockAdjustedLog


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. BOOKING_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    details: dict[str, Any] = Field(
        default_factory=dict, description="Structured context, e.g. remaining capacity"
    )
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


class HealthResponse(BaseModel):
    status: str
    version: str
    database: str
    schema_version: str | None = None


# --- Bookings ---


class BookingResponse(BaseModel):
    """Booking response DTO."""

    id: int
    student_name: str
    student_email: str | None = None
    student_phone: str | None = None
    number_of_people: int
    session_date: date
    session_time: str
    booking_type: str
    status: str
    notes: str | None = None
    created_by_id: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id,  # type: ignore[arg-type]
            student_name=booking.student_name,
            student_email=booking.student_email,
            student_phone=booking.student_phone,
            number_of_people=booking.number_of_people,
            session_date=booking.session_date,
            session_time=booking.session_time.value,
            booking_type=booking.booking_type.value,
            status=booking.status.value,
            notes=booking.notes,
            created_by_id=booking.created_by_id,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class BookingListResponse(BaseModel):
    bookings: list[BookingResponse]
    total: int


class CapacityCheckResponse(BaseModel):
    """Result of a capacity check; a rejection is not an error."""

    accepted: bool
    current_capacity: int
    max_capacity: int
    spots_remaining: int

    @classmethod
    def from_entity(cls, check: CapacityCheck) -> "CapacityCheckResponse":
        return cls(**check.model_dump())


class SlotCapacityResponse(BaseModel):
    booked: int
    available: int
    percentage: int


class DayCapacityResponse(BaseModel):
    session_date: date
    max_capacity: int
    session_1: SlotCapacityResponse
    session_2: SlotCapacityResponse

    @classmethod
    def from_entity(cls, day: DayCapacity) -> "DayCapacityResponse":
        return cls.model_validate(day.model_dump())


class SessionCapacityResponse(BaseModel):
    max_capacity: int
    days: list[DayCapacityResponse]


# --- Inventory ---


class InventoryItemResponse(BaseModel):
    """Inventory item response DTO."""

    id: int
    name: str
    description: str | None = None
    unit: str
    current_stock: Decimal
    current_cost: Decimal
    total_value: Decimal
    reorder_level: Decimal | None = None
    is_low_stock: bool = False
    created_by_id: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, item: InventoryItem) -> "InventoryItemResponse":
        return cls(
            id=item.id,  # type: ignore[arg-type]
            name=item.name,
            description=item.description,
            unit=item.unit,
            current_stock=item.current_stock,
            current_cost=item.current_cost,
            total_value=item.total_value,
            reorder_level=item.reorder_level,
            is_low_stock=item.is_low_stock,
            created_by_id=item.created_by_id,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class InventoryListResponse(BaseModel):
    items: list[InventoryItemResponse]
    total: int
    total_stock_value: Decimal
    low_stock_count: int


class PriceHistoryResponse(BaseModel):
    id: int
    old_price: Decimal | None = None
    new_price: Decimal
    changed_by: str
    reason: str | None = None
    effective_date: datetime

    @classmethod
    def from_entity(cls, entry: InventoryPriceHistory) -> "PriceHistoryResponse":
        return cls(
            id=entry.id,  # type: ignore[arg-type]
            old_price=entry.old_price,
            new_price=entry.new_price,
            changed_by=entry.changed_by,
            reason=entry.reason,
            effective_date=entry.effective_date,
        )


class InventoryLogResponse(BaseModel):
    """Audit log entry response DTO."""

    id: int
    item_id: int
    action: str
    old_value: dict[str, Any] | None = None
    new_value: dict[str, Any] | None = None
    quantity: Decimal | None = None
    notes: str | None = None
    is_purchase: bool = False
    supplier: str | None = None
    reversed_log_id: int | None = None
    booking_id: int | None = None
    performed_by_id: str | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, log: InventoryLog) -> "InventoryLogResponse":
        data = log.model_dump(mode="json")
        return cls(
            id=log.id,  # type: ignore[arg-type]
            item_id=log.item_id,
            action=log.action,
            old_value=data.get("old_value"),
            new_value=data.get("new_value"),
            quantity=log.quantity,
            notes=log.notes,
            is_purchase=isinstance(log, StockAdjustedLog) and log.is_purchase,
            supplier=data.get("supplier"),
            reversed_log_id=data.get("reversed_log_id"),
            booking_id=log.booking_id,
            performed_by_id=log.performed_by_id,
            created_at=log.created_at,
        )


class InventoryItemDetailResponse(BaseModel):
    item: InventoryItemResponse
    price_history: list[PriceHistoryResponse]
    logs: list[InventoryLogResponse]


class InventoryItemDeletedResponse(BaseModel):
    id: int
    deleted: bool = True
    log_id: int


class PurchaseResponse(BaseModel):
    """Outcome of recording a purchase."""

    item: InventoryItemResponse
    log: InventoryLogResponse
    expense_id: int
    new_stock: Decimal
    new_unit_cost: Decimal


class ReversePurchaseResponse(BaseModel):
    """Outcome of reversing a purchase."""

    item: InventoryItemResponse
    log: InventoryLogResponse
    reversed_log_id: int
    restored_stock: Decimal
    restored_cost: Decimal
    warning: str


class BookingMutationResponse(BaseModel):
    """A booking together with the stock movements its change caused."""

    booking: BookingResponse
    inventory_movements: list[InventoryLogResponse] = Field(default_factory=list)


class BookingDeletedResponse(BaseModel):
    id: int
    deleted: bool = True
    inventory_movements: list[InventoryLogResponse] = Field(default_factory=list)


# --- Cost of sale ---


class CostOfSaleItemResponse(BaseModel):
    id: int
    item_id: int
    item_name: str | None = None
    item_unit: str | None = None
    quantity_per_person: Decimal
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, cos_item: CostOfSaleItem) -> "CostOfSaleItemResponse":
        return cls(
            id=cos_item.id,  # type: ignore[arg-type]
            item_id=cos_item.item_id,
            item_name=cos_item.item_name,
            item_unit=cos_item.item_unit,
            quantity_per_person=cos_item.quantity_per_person,
            created_at=cos_item.created_at,
            updated_at=cos_item.updated_at,
        )


class CostOfSaleListResponse(BaseModel):
    items: list[CostOfSaleItemResponse]
    total: int


# --- Settings ---


class ClassTimingResponse(BaseModel):
    day_of_week: int
    session_time: str
    start_time: time
    end_time: time


class SettingsResponse(BaseModel):
    max_persons_per_class: int
    currency: str
    currency_symbol: str
    class_timings: list[ClassTimingResponse]
    updated_at: datetime

    @classmethod
    def from_entity(cls, settings: AppSettings) -> "SettingsResponse":
        return cls(
            max_persons_per_class=settings.max_persons_per_class,
            currency=settings.currency.value,
            currency_symbol=settings.currency.symbol,
            class_timings=[
                ClassTimingResponse(
                    day_of_week=t.day_of_week,
                    session_time=t.session_time.value,
                    start_time=t.start_time,
                    end_time=t.end_time,
                )
                for t in settings.class_timings
            ],
            updated_at=settings.updated_at,
        )


# --- Reports ---


class InventoryReportItemResponse(BaseModel):
    item_id: int
    name: str
    unit: str
    current_stock: Decimal
    current_cost: Decimal
    stock_value: Decimal
    is_low_stock: bool
    consumed_quantity: Decimal
    consumed_value: Decimal


class InventoryReportResponse(BaseModel):
    """Stock valuation and consumption over a period."""

    start_date: date | None = None
    end_date: date | None = None
    items: list[InventoryReportItemResponse]
    total_stock_value: Decimal
    cost_of_goods_consumed: Decimal
    low_stock_items: list[InventoryReportItemResponse]
