"""Inventory domain entities."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from studio.core.entities.base import utc_now


class InventoryItem(BaseModel):
    """Tracks stock level and weighted average cost for a consumable."""

    id: int | None = None
    name: str
    description: str | None = None
    unit: str = "unit"
    current_stock: Decimal = Decimal("0")  # signed, may go negative
    current_cost: Decimal = Decimal("0")  # Weighted Average Cost
    reorder_level: Decimal | None = None
    created_by_id: str | None = None
    is_deleted: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def total_value(self) -> Decimal:
        """Total inventory value = current_stock * current_cost."""
        return self.current_stock * self.current_cost

    @property
    def is_low_stock(self) -> bool:
        """True when a reorder level is set and stock is at or below it."""
        if self.reorder_level is None:
            return False
        return self.current_stock <= self.reorder_level


class InventorySummary(BaseModel):
    """Totals over every active item, independent of paging."""

    total_items: int = 0
    total_stock_value: Decimal = Decimal("0")
    low_stock_count: int = 0


class InventoryPriceHistory(BaseModel):
    """One unit-cost change of an item. old_price is None only for the first row."""

    id: int | None = None
    item_id: int
    old_price: Decimal | None = None
    new_price: Decimal
    changed_by: str  # display name snapshot
    reason: str | None = None
    effective_date: datetime = Field(default_factory=utc_now)


class CostOfSaleItem(BaseModel):
    """An item consumed automatically for every booked person."""

    id: int | None = None
    item_id: int
    quantity_per_person: Decimal
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    # Denormalized for listings
    item_name: str | None = None
    item_unit: str | None = None

    def quantity_for(self, people: int) -> Decimal:
        """Stock consumed for the given number of people."""
        return self.quantity_per_person * people
