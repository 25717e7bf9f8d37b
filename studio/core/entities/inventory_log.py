"""
Inventory audit log entities.

Every log entry is one variant of a union keyed by ``action``. Each variant
carries typed before/after snapshots, so consumers pattern-match on the
variant instead of parsing free-form JSON or sniffing the notes text.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from studio.core.entities.base import utc_now


class InventoryAction(str, Enum):
    """Kinds of audit log entries."""

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    STOCK_ADJUSTED = "STOCK_ADJUSTED"
    PRICE_CHANGED = "PRICE_CHANGED"
    AUTO_CONSUMED = "AUTO_CONSUMED"
    DELETED = "DELETED"


class StockSnapshot(BaseModel):
    """Stock level (and optionally unit cost) at one point in time."""

    stock: Decimal
    cost: Decimal | None = None


class CostSnapshot(BaseModel):
    """Unit cost at one point in time."""

    cost: Decimal


class ItemSnapshot(BaseModel):
    """Full item state written on creation and deletion."""

    name: str
    stock: Decimal
    cost: Decimal
    unit: str


class _LogBase(BaseModel):
    id: int | None = None
    item_id: int
    quantity: Decimal | None = None  # signed stock delta
    notes: str | None = None
    performed_by_id: str | None = None
    booking_id: int | None = None
    created_at: datetime = Field(default_factory=utc_now)


class CreatedLog(_LogBase):
    action: Literal["CREATED"] = "CREATED"
    old_value: None = None
    new_value: ItemSnapshot


class UpdatedLog(_LogBase):
    """Non-stock, non-price field edits; only changed fields are recorded."""

    action: Literal["UPDATED"] = "UPDATED"
    old_value: dict[str, Any] = Field(default_factory=dict)
    new_value: dict[str, Any] = Field(default_factory=dict)


class StockAdjustedLog(_LogBase):
    """
    Stock moved outside of auto-consumption.

    Covers purchases (``is_purchase``), purchase reversals
    (``reversed_log_id``), booking restorations (``booking_id``) and manual
    corrections.
    """

    action: Literal["STOCK_ADJUSTED"] = "STOCK_ADJUSTED"
    old_value: StockSnapshot
    new_value: StockSnapshot
    is_purchase: bool = False
    supplier: str | None = None
    reversed_log_id: int | None = None

    @property
    def is_reversible_purchase(self) -> bool:
        return self.is_purchase and self.quantity is not None and self.quantity > 0


class PriceChangedLog(_LogBase):
    action: Literal["PRICE_CHANGED"] = "PRICE_CHANGED"
    old_value: CostSnapshot
    new_value: CostSnapshot


class AutoConsumedLog(_LogBase):
    """Stock debited (or credited on a pax decrease) for a booking."""

    action: Literal["AUTO_CONSUMED"] = "AUTO_CONSUMED"
    old_value: StockSnapshot
    new_value: StockSnapshot
    booking_id: int


class DeletedLog(_LogBase):
    action: Literal["DELETED"] = "DELETED"
    old_value: ItemSnapshot | None = None
    new_value: None = None


InventoryLog = Annotated[
    CreatedLog
    | UpdatedLog
    | StockAdjustedLog
    | PriceChangedLog
    | AutoConsumedLog
    | DeletedLog,
    Field(discriminator="action"),
]

inventory_log_adapter: TypeAdapter[InventoryLog] = TypeAdapter(InventoryLog)


def is_purchase(log: InventoryLog) -> bool:
    """True for a stock increase recorded by the purchase ledger."""
    return isinstance(log, StockAdjustedLog) and log.is_reversible_purchase


def is_booking_movement(log: InventoryLog) -> bool:
    """True for consumption and restoration entries tied to a booking."""
    if isinstance(log, AutoConsumedLog):
        return True
    return isinstance(log, StockAdjustedLog) and log.booking_id is not None
