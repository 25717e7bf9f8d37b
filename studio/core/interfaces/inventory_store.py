"""Abstract interface for inventory item storage."""

from abc import ABC, abstractmethod

from studio.core.entities.inventory import (
    InventoryItem,
    InventoryPriceHistory,
    InventorySummary,
)


class IInventoryStore(ABC):
    """Interface for inventory item and price history persistence."""

    @abstractmethod
    async def create_item(self, item: InventoryItem) -> InventoryItem:
        """Create a new inventory item."""
        pass

    @abstractmethod
    async def get_item(
        self, item_id: int, include_deleted: bool = False
    ) -> InventoryItem | None:
        """Get inventory item by ID. Soft-deleted items are hidden by default."""
        pass

    @abstractmethod
    async def update_item(self, item: InventoryItem) -> InventoryItem:
        """Update inventory item (name, stock, cost, etc.)."""
        pass

    @abstractmethod
    async def soft_delete_item(self, item_id: int) -> bool:
        """Mark an item deleted. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def list_items(self, limit: int = 500, offset: int = 0) -> list[InventoryItem]:
        """List active inventory items ordered by name."""
        pass

    @abstractmethod
    async def get_summary(self) -> InventorySummary:
        """Item count, stock value and low-stock count over all active items."""
        pass

    @abstractmethod
    async def add_price_history(
        self, entry: InventoryPriceHistory
    ) -> InventoryPriceHistory:
        """Append a price history row."""
        pass

    @abstractmethod
    async def get_price_history(self, item_id: int) -> list[InventoryPriceHistory]:
        """Get price history for an item, newest first."""
        pass
