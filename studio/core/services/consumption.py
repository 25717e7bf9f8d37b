"""
Inventory consumption engine.

Debits the cost-of-sale recipe from stock when a booking is made, moves the
difference when its party size changes, and gives the stock back when it is
cancelled or deleted. Every stock write is paired with one audit log entry;
callers provide the transaction scope.
"""

from decimal import Decimal

from studio.config import get_logger
from studio.core.entities.inventory import InventoryItem
from studio.core.entities.inventory_log import (
    AutoConsumedLog,
    StockAdjustedLog,
    StockSnapshot,
)
from studio.core.exceptions import InsufficientStockError, InventoryItemNotFoundError
from studio.core.interfaces import (
    ICostOfSaleStore,
    IInventoryLogStore,
    IInventoryStore,
)
from studio.core.services.audit_log import AuditLog

logger = get_logger(__name__)

RESTORE_NOTES = "Restored due to booking cancellation/deletion"


def _people(count: int) -> str:
    return "person" if count == 1 else "people"


class InventoryConsumptionEngine:
    """Keeps stock in step with the bookings that consume it."""

    def __init__(
        self,
        inventory_store: IInventoryStore,
        log_store: IInventoryLogStore,
        cost_of_sale_store: ICostOfSaleStore,
        allow_negative_stock: bool = True,
    ):
        self._inventory_store = inventory_store
        self._log_store = log_store
        self._cost_of_sale_store = cost_of_sale_store
        self._audit_log = AuditLog(log_store)
        self.allow_negative_stock = allow_negative_stock

    async def consume(
        self,
        booking_id: int,
        number_of_people: int,
        performed_by: str | None = None,
    ) -> list[AutoConsumedLog]:
        """Debit ``quantity_per_person * number_of_people`` of every recipe item."""
        recipe = await self._cost_of_sale_store.list_items()
        if not recipe:
            return []

        notes = f"Auto-consumed for {number_of_people} {_people(number_of_people)}"
        logs = []
        for cos_item in recipe:
            logs.append(
                await self._debit(
                    cos_item.item_id,
                    cos_item.quantity_for(number_of_people),
                    booking_id,
                    notes,
                    performed_by,
                )
            )

        logger.info(
            "inventory_consumed",
            booking_id=booking_id,
            people=number_of_people,
            items=len(logs),
        )
        return logs

    async def adjust(
        self,
        booking_id: int,
        old_people: int,
        new_people: int,
        performed_by: str | None = None,
    ) -> list[AutoConsumedLog]:
        """
        Move stock by the change in party size only.

        Growing a party consumes more; shrinking it credits stock back through
        a positive ``AUTO_CONSUMED`` entry.
        """
        difference = new_people - old_people
        if difference == 0:
            return []

        recipe = await self._cost_of_sale_store.list_items()
        if not recipe:
            return []

        notes = f"Adjusted for people change: {old_people} → {new_people}"
        logs = []
        for cos_item in recipe:
            logs.append(
                await self._debit(
                    cos_item.item_id,
                    cos_item.quantity_for(difference),
                    booking_id,
                    notes,
                    performed_by,
                )
            )

        logger.info(
            "inventory_adjusted",
            booking_id=booking_id,
            old_people=old_people,
            new_people=new_people,
            items=len(logs),
        )
        return logs

    async def restore(
        self,
        booking_id: int,
        performed_by: str | None = None,
    ) -> list[StockAdjustedLog]:
        """
        Give back whatever stock the booking still holds.

        Replays the booking's log trail rather than the current recipe, so
        recipe edits made after the booking do not skew the reversal. Earlier
        restorations are part of the replay, which makes a second call a
        no-op.
        """
        balance = await self._audit_log.booking_balance(booking_id)

        logs = []
        for item_id, held in balance.items():
            if held == 0:
                continue

            item = await self._inventory_store.get_item(item_id)
            if item is None:
                logger.warning(
                    "restore_skipped_missing_item",
                    booking_id=booking_id,
                    item_id=item_id,
                    quantity=str(-held),
                )
                continue

            old_stock = item.current_stock
            item.current_stock = old_stock - held
            await self._inventory_store.update_item(item)
            log = await self._log_store.add_log(
                StockAdjustedLog(
                    item_id=item_id,
                    old_value=StockSnapshot(stock=old_stock),
                    new_value=StockSnapshot(stock=item.current_stock),
                    quantity=-held,
                    notes=RESTORE_NOTES,
                    performed_by_id=performed_by,
                    booking_id=booking_id,
                )
            )
            logs.append(log)

        if logs:
            logger.info("inventory_restored", booking_id=booking_id, items=len(logs))
        return logs  # type: ignore[return-value]

    async def _debit(
        self,
        item_id: int,
        quantity: Decimal,
        booking_id: int,
        notes: str,
        performed_by: str | None,
    ) -> AutoConsumedLog:
        item = await self._inventory_store.get_item(item_id)
        if item is None:
            raise InventoryItemNotFoundError(item_id)

        old_stock = item.current_stock
        new_stock = old_stock - quantity
        self._check_stock(item, quantity, new_stock)

        item.current_stock = new_stock
        await self._inventory_store.update_item(item)
        return await self._log_store.add_log(  # type: ignore[return-value]
            AutoConsumedLog(
                item_id=item_id,
                old_value=StockSnapshot(stock=old_stock),
                new_value=StockSnapshot(stock=new_stock),
                quantity=-quantity,
                notes=notes,
                performed_by_id=performed_by,
                booking_id=booking_id,
            )
        )

    def _check_stock(
        self, item: InventoryItem, quantity: Decimal, new_stock: Decimal
    ) -> None:
        if quantity <= 0 or new_stock >= 0:
            return
        if not self.allow_negative_stock:
            raise InsufficientStockError(
                item.id,  # type: ignore[arg-type]
                requested=quantity,
                available=item.current_stock,
            )
        logger.warning(
            "stock_went_negative",
            item_id=item.id,
            item_name=item.name,
            stock=str(new_stock),
        )
