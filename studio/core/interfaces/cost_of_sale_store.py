"""Abstract interface for the cost-of-sale recipe."""

from abc import ABC, abstractmethod

from studio.core.entities.inventory import CostOfSaleItem


class ICostOfSaleStore(ABC):
    """Interface for cost-of-sale configuration rows (one per item)."""

    @abstractmethod
    async def list_items(self) -> list[CostOfSaleItem]:
        """List configured items, oldest first."""
        pass

    @abstractmethod
    async def get(self, cos_id: int) -> CostOfSaleItem | None:
        """Get a configuration row by ID."""
        pass

    @abstractmethod
    async def get_by_item(self, item_id: int) -> CostOfSaleItem | None:
        """Get the configuration row of an inventory item."""
        pass

    @abstractmethod
    async def create(self, cos_item: CostOfSaleItem) -> CostOfSaleItem:
        """Add an item to the recipe."""
        pass

    @abstractmethod
    async def update(self, cos_item: CostOfSaleItem) -> CostOfSaleItem:
        """Update quantity per person."""
        pass

    @abstractmethod
    async def delete(self, cos_id: int) -> bool:
        """Remove a row. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def delete_by_item(self, item_id: int) -> int:
        """Remove the row of an inventory item. Returns rows deleted."""
        pass
