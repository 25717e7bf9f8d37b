"""
Weighted-average cost ledger.

Records purchases against inventory items, blending the purchase price into
the item's unit cost and writing the matching audit log and expense rows.
Callers provide the transaction scope.
"""

from dataclasses import dataclass
from decimal import Decimal

from studio.config import get_logger
from studio.core.entities.expense import Expense
from studio.core.entities.inventory import InventoryItem
from studio.core.entities.inventory_log import StockAdjustedLog, StockSnapshot
from studio.core.exceptions import InventoryItemNotFoundError, ValidationError
from studio.core.interfaces import (
    IExpenseStore,
    IInventoryLogStore,
    IInventoryStore,
    ISettingsStore,
)

logger = get_logger(__name__)


def weighted_average_cost(
    current_stock: Decimal,
    current_cost: Decimal,
    quantity: Decimal,
    total_cost: Decimal,
) -> tuple[Decimal, Decimal]:
    """
    Blend a purchase into the running average.

    Returns ``(new_stock, new_cost)``. When the item has no positive stock on
    hand the purchase price becomes the unit cost; a negative balance is not
    allowed to drag the average below (or divide by) zero.
    """
    new_stock = current_stock + quantity
    if current_stock <= 0:
        new_cost = total_cost / quantity
    else:
        new_cost = (current_stock * current_cost + total_cost) / new_stock
    return new_stock, new_cost


def format_quantity(value: Decimal) -> str:
    """Render a quantity without a trailing exponent or zeros (10, 2.5)."""
    return format(value.normalize(), "f")


def purchase_notes(
    quantity: Decimal,
    unit: str,
    unit_price: Decimal,
    currency_symbol: str,
    supplier: str | None = None,
) -> str:
    notes = (
        f"Purchase: {format_quantity(quantity)} {unit} @ "
        f"{currency_symbol}{unit_price:.2f}/{unit}"
    )
    if supplier:
        notes += f" from {supplier}"
    return notes


@dataclass
class PurchaseRecord:
    """Everything written by one purchase."""

    item: InventoryItem
    log: StockAdjustedLog
    expense: Expense


class WeightedAverageCostLedger:
    """Records purchases with weighted-average cost recalculation."""

    def __init__(
        self,
        inventory_store: IInventoryStore,
        log_store: IInventoryLogStore,
        expense_store: IExpenseStore,
        settings_store: ISettingsStore,
        expense_category: str = "Cost of Sale",
    ):
        self._inventory_store = inventory_store
        self._log_store = log_store
        self._expense_store = expense_store
        self._settings_store = settings_store
        self._expense_category = expense_category

    async def record_purchase(
        self,
        item_id: int,
        quantity: Decimal,
        total_cost: Decimal,
        supplier: str | None = None,
        performed_by: str | None = None,
    ) -> PurchaseRecord:
        """
        Record a purchase of ``quantity`` units costing ``total_cost`` overall.

        Writes, in the caller's transaction: the item's new stock and cost, one
        ``STOCK_ADJUSTED`` purchase log holding the before/after snapshots, and
        one expense under the cost-of-sale category.

        Raises:
            ValidationError: quantity or total cost is not positive
            InventoryItemNotFoundError: item missing or deleted
        """
        if quantity <= 0:
            raise ValidationError("quantity", "Quantity must be greater than 0", quantity)
        if total_cost <= 0:
            raise ValidationError(
                "total_cost", "Total cost must be greater than 0", total_cost
            )

        item = await self._inventory_store.get_item(item_id)
        if item is None:
            raise InventoryItemNotFoundError(item_id)

        old_stock = item.current_stock
        old_cost = item.current_cost
        new_stock, new_cost = weighted_average_cost(
            old_stock, old_cost, quantity, total_cost
        )

        item.current_stock = new_stock
        item.current_cost = new_cost
        item = await self._inventory_store.update_item(item)

        settings = await self._settings_store.get_or_create()
        log = await self._log_store.add_log(
            StockAdjustedLog(
                item_id=item_id,
                old_value=StockSnapshot(stock=old_stock, cost=old_cost),
                new_value=StockSnapshot(stock=new_stock, cost=new_cost),
                quantity=quantity,
                notes=purchase_notes(
                    quantity,
                    item.unit,
                    total_cost / quantity,
                    settings.currency.symbol,
                    supplier,
                ),
                performed_by_id=performed_by,
                is_purchase=True,
                supplier=supplier,
            )
        )

        category = await self._expense_store.get_or_create_category(
            self._expense_category
        )
        expense = await self._expense_store.create_expense(
            Expense(
                description=item.name,
                amount=total_cost,
                category_id=category.id,  # type: ignore[arg-type]
                notes=f"Supplier: {supplier}" if supplier else None,
                created_by_id=performed_by,
            )
        )

        logger.info(
            "purchase_recorded",
            item_id=item_id,
            quantity=str(quantity),
            total_cost=str(total_cost),
            new_stock=str(new_stock),
            new_cost=str(round(new_cost, 4)),
            log_id=log.id,
            expense_id=expense.id,
        )
        return PurchaseRecord(item=item, log=log, expense=expense)  # type: ignore[arg-type]
