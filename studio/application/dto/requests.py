"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date, time
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from studio.core.entities.app_settings import Currency
from studio.core.entities.booking import BookingStatus, BookingType, SessionTime

# --- Bookings ---


class CreateBookingRequest(BaseModel):
    """Request to book a party into a session slot."""

    student_name: str = Field(..., min_length=1, description="Name of the person booking")
    student_email: str | None = Field(default=None, description="Contact email")
    student_phone: str | None = Field(default=None, description="Contact phone")
    number_of_people: int = Field(default=1, gt=0, description="Party size")
    session_date: date = Field(..., description="Calendar day of the session")
    session_time: SessionTime = Field(..., description="Session slot")
    booking_type: BookingType = Field(default=BookingType.REGULAR)
    status: BookingStatus = Field(default=BookingStatus.PENDING)
    notes: str | None = Field(default=None)


class UpdateBookingRequest(BaseModel):
    """Partial booking update. Omitted fields keep their value."""

    student_name: str | None = Field(default=None, min_length=1)
    student_email: str | None = None
    student_phone: str | None = None
    number_of_people: int | None = Field(default=None, gt=0)
    session_date: date | None = None
    session_time: SessionTime | None = None
    booking_type: BookingType | None = None
    status: BookingStatus | None = None
    notes: str | None = None


# --- Inventory ---


class CreateInventoryItemRequest(BaseModel):
    """Request to create an inventory item."""

    name: str = Field(..., min_length=1, description="Item name")
    unit: str = Field(default="unit", min_length=1, description="Unit label, e.g. kg or piece")
    description: str | None = None
    current_stock: Decimal = Field(default=Decimal("0"), description="Opening stock")
    current_cost: Decimal = Field(default=Decimal("0"), ge=0, description="Opening unit cost")
    reorder_level: Decimal | None = Field(default=None, ge=0)


class UpdateInventoryItemRequest(BaseModel):
    """Manual edit of an inventory item. Omitted fields keep their value."""

    name: str | None = Field(default=None, min_length=1)
    unit: str | None = Field(default=None, min_length=1)
    description: str | None = None
    current_stock: Decimal | None = None
    current_cost: Decimal | None = Field(default=None, ge=0)
    reorder_level: Decimal | None = Field(default=None, ge=0)
    reason: str | None = Field(default=None, description="Reason recorded with a price change")


class RecordPurchaseRequest(BaseModel):
    """Purchase of stock for an inventory item."""

    quantity: Decimal = Field(..., gt=0, description="Units purchased")
    total_cost: Decimal = Field(..., gt=0, description="Total paid for the purchase")
    supplier: str | None = Field(default=None, description="Supplier name")


# --- Cost of sale ---


class CreateCostOfSaleItemRequest(BaseModel):
    """Add an inventory item to the per-person recipe."""

    item_id: int = Field(..., description="Inventory item ID")
    quantity_per_person: Decimal = Field(..., gt=0, description="Units consumed per person")


class UpdateCostOfSaleItemRequest(BaseModel):
    quantity_per_person: Decimal = Field(..., gt=0)


# --- Settings ---


class ClassTimingRequest(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Monday")
    session_time: SessionTime
    start_time: time
    end_time: time

    @model_validator(mode="after")
    def check_order(self) -> "ClassTimingRequest":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class UpdateSettingsRequest(BaseModel):
    """Partial settings update. Omitted fields keep their value."""

    currency: Currency | None = None
    max_persons_per_class: int | None = Field(default=None, ge=1)
    class_timings: list[ClassTimingRequest] | None = None
