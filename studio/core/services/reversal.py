"""Purchase reversal: puts an item back exactly as it was before a purchase."""

from dataclasses import dataclass

from studio.config import get_logger
from studio.core.entities.inventory import InventoryItem
from studio.core.entities.inventory_log import (
    StockAdjustedLog,
    StockSnapshot,
    is_purchase,
)
from studio.core.exceptions import (
    CorruptAuditDataError,
    InvalidOperationError,
    InventoryItemNotFoundError,
    InventoryLogNotFoundError,
)
from studio.core.interfaces import IInventoryLogStore, IInventoryStore

logger = get_logger(__name__)

EXPENSE_WARNING = (
    "Stock and cost were restored. The expense recorded for this purchase was "
    "not deleted; remove it manually if it should no longer be reported."
)


@dataclass
class ReversalRecord:
    """Outcome of a purchase reversal."""

    item: InventoryItem
    log: StockAdjustedLog
    reversed_log: StockAdjustedLog
    warning: str = EXPENSE_WARNING


class PurchaseReversal:
    """Undoes a purchase from the snapshot stored in its log entry."""

    def __init__(self, inventory_store: IInventoryStore, log_store: IInventoryLogStore):
        self._inventory_store = inventory_store
        self._log_store = log_store

    async def reverse_purchase(
        self,
        item_id: int,
        log_id: int,
        performed_by: str | None = None,
    ) -> ReversalRecord:
        """
        Reverse the purchase recorded by ``log_id``.

        Stock and cost are set to the log's "before" snapshot, not recomputed.
        The purchase entry is deleted and replaced by a reversal entry. The
        expense written with the purchase is left for the operator.

        Raises:
            InventoryLogNotFoundError: no such log
            InvalidOperationError: log is not a purchase, or is for another item
            InventoryItemNotFoundError: item missing or deleted
            CorruptAuditDataError: snapshot lacks the cost to restore
        """
        log = await self._log_store.get_log(log_id)
        if log is None:
            raise InventoryLogNotFoundError(log_id)
        if log.item_id != item_id:
            raise InvalidOperationError(
                "reverse purchase",
                f"log {log_id} does not belong to item {item_id}",
            )
        if not isinstance(log, StockAdjustedLog) or not is_purchase(log):
            raise InvalidOperationError(
                "reverse purchase",
                f"log {log_id} is not a purchase",
            )

        item = await self._inventory_store.get_item(item_id)
        if item is None:
            raise InventoryItemNotFoundError(item_id)

        before = log.old_value
        if before.cost is None:
            raise CorruptAuditDataError(log_id, "purchase snapshot has no cost")

        current = StockSnapshot(stock=item.current_stock, cost=item.current_cost)
        item.current_stock = before.stock
        item.current_cost = before.cost
        item = await self._inventory_store.update_item(item)

        await self._log_store.delete_log(log_id)
        reversal = await self._log_store.add_log(
            StockAdjustedLog(
                item_id=item_id,
                old_value=current,
                new_value=StockSnapshot(stock=before.stock, cost=before.cost),
                quantity=-log.quantity,  # type: ignore[operator]
                notes=f"Purchase reversed: {log.notes or ''}".rstrip(),
                performed_by_id=performed_by,
                reversed_log_id=log_id,
            )
        )

        logger.info(
            "purchase_reversed",
            item_id=item_id,
            reversed_log_id=log_id,
            restored_stock=str(before.stock),
            restored_cost=str(before.cost),
        )
        return ReversalRecord(item=item, log=reversal, reversed_log=log)  # type: ignore[arg-type]
