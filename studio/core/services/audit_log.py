"""
Read side of the inventory audit log.

The log is append-only; the stores expose the writes. This service answers
the questions other components ask of the trail: an item's history, its
reversible purchases, and how much stock a booking still holds.
"""

from decimal import Decimal

from studio.core.entities.inventory_log import (
    InventoryLog,
    is_booking_movement,
    is_purchase,
)
from studio.core.interfaces import IInventoryLogStore


class AuditLog:
    """Queries over the inventory audit trail."""

    def __init__(self, log_store: IInventoryLogStore):
        self._log_store = log_store

    async def list_logs(self, item_id: int, limit: int = 100) -> list[InventoryLog]:
        """Logs of an item, newest first. Unknown items yield an empty list."""
        return await self._log_store.list_logs(item_id, limit=limit)

    async def list_purchases(self, item_id: int) -> list[InventoryLog]:
        """Purchases of an item that can still be reversed, newest first."""
        logs = await self._log_store.list_purchases(item_id)
        return [log for log in logs if is_purchase(log)]

    async def booking_balance(self, booking_id: int) -> dict[int, Decimal]:
        """
        Net stock movement per item attributed to a booking.

        Sums the signed quantities of every consumption, adjustment and
        restoration entry carrying ``booking_id``. A negative balance is stock
        the booking still holds; zero means it has been fully given back.
        """
        balance: dict[int, Decimal] = {}
        for log in await self._log_store.list_booking_logs(booking_id):
            if not is_booking_movement(log) or log.quantity is None:
                continue
            balance[log.item_id] = balance.get(log.item_id, Decimal("0")) + log.quantity
        return balance
