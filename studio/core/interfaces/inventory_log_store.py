"""Abstract interface for the inventory audit log."""

from abc import ABC, abstractmethod
from datetime import datetime

from studio.core.entities.inventory_log import InventoryAction, InventoryLog


class IInventoryLogStore(ABC):
    """
    Interface for the append-only inventory audit log.

    The only destructive operation is ``delete_log``, reserved for purchase
    reversal.
    """

    @abstractmethod
    async def add_log(self, log: InventoryLog) -> InventoryLog:
        """Append a log entry."""
        pass

    @abstractmethod
    async def get_log(self, log_id: int) -> InventoryLog | None:
        """Get a log entry by ID."""
        pass

    @abstractmethod
    async def delete_log(self, log_id: int) -> bool:
        """Delete a log entry. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def list_logs(self, item_id: int, limit: int = 100) -> list[InventoryLog]:
        """Get logs for an item, newest first."""
        pass

    @abstractmethod
    async def list_purchases(self, item_id: int) -> list[InventoryLog]:
        """Get reversible purchase logs for an item, newest first."""
        pass

    @abstractmethod
    async def list_booking_logs(self, booking_id: int) -> list[InventoryLog]:
        """Get every log correlated with a booking, oldest first."""
        pass

    @abstractmethod
    async def list_logs_between(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        action: InventoryAction | None = None,
    ) -> list[InventoryLog]:
        """Get logs created in [start, end), optionally filtered by action."""
        pass
