"""
Inventory Report Use Case.

Stock valuation and consumption over a period.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from studio.application.dto.responses import (
    InventoryReportItemResponse,
    InventoryReportResponse,
)
from studio.config import get_logger
from studio.core.entities.inventory import InventoryItem
from studio.core.entities.inventory_log import InventoryAction
from studio.core.exceptions import ValidationError
from studio.core.interfaces import IInventoryLogStore, IInventoryStore

logger = get_logger(__name__)


@dataclass
class InventoryReportLine:
    item: InventoryItem
    consumed_quantity: Decimal = Decimal("0")

    @property
    def consumed_value(self) -> Decimal:
        return self.consumed_quantity * self.item.current_cost


@dataclass
class InventoryReport:
    start_date: date | None
    end_date: date | None
    lines: list[InventoryReportLine] = field(default_factory=list)

    @property
    def total_stock_value(self) -> Decimal:
        return sum((line.item.total_value for line in self.lines), Decimal("0"))

    @property
    def cost_of_goods_consumed(self) -> Decimal:
        return sum((line.consumed_value for line in self.lines), Decimal("0"))


class InventoryReportUseCase:
    """Value current stock and total the auto-consumption in a date range."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        log_store: IInventoryLogStore | None = None,
    ):
        self._inventory_store = inventory_store
        self._log_store = log_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from studio.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_log_store(self) -> IInventoryLogStore:
        if self._log_store is None:
            from studio.infrastructure.storage.sqlite import get_inventory_log_store

            self._log_store = await get_inventory_log_store()
        return self._log_store

    async def execute(
        self, start_date: date | None = None, end_date: date | None = None
    ) -> InventoryReport:
        """
        Build the report. Both dates are inclusive.

        Consumption nets AUTO_CONSUMED entries only, so a party-size decrease
        inside the period lowers it. Values use the current unit cost.
        """
        if start_date and end_date and end_date < start_date:
            raise ValidationError("end_date", "End date must not be before start date", end_date)

        inv_store = await self._get_inventory_store()
        log_store = await self._get_log_store()

        items = await inv_store.list_items()
        logs = await log_store.list_logs_between(
            start=datetime.combine(start_date, time.min) if start_date else None,
            end=datetime.combine(end_date + timedelta(days=1), time.min) if end_date else None,
            action=InventoryAction.AUTO_CONSUMED,
        )

        consumed: dict[int, Decimal] = defaultdict(Decimal)
        for log in logs:
            if log.quantity is not None:
                consumed[log.item_id] -= log.quantity

        report = InventoryReport(
            start_date=start_date,
            end_date=end_date,
            lines=[
                InventoryReportLine(
                    item=item,
                    consumed_quantity=consumed.get(item.id, Decimal("0")),  # type: ignore[arg-type]
                )
                for item in items
            ],
        )

        logger.info(
            "inventory_report_generated",
            items=len(report.lines),
            total_stock_value=str(report.total_stock_value),
            cost_of_goods_consumed=str(report.cost_of_goods_consumed),
        )
        return report

    def to_response(self, report: InventoryReport) -> InventoryReportResponse:
        """Convert result to API response."""
        rows = [
            InventoryReportItemResponse(
                item_id=line.item.id,  # type: ignore[arg-type]
                name=line.item.name,
                unit=line.item.unit,
                current_stock=line.item.current_stock,
                current_cost=line.item.current_cost,
                stock_value=line.item.total_value,
                is_low_stock=line.item.is_low_stock,
                consumed_quantity=line.consumed_quantity,
                consumed_value=line.consumed_value,
            )
            for line in report.lines
        ]
        return InventoryReportResponse(
            start_date=report.start_date,
            end_date=report.end_date,
            items=rows,
            total_stock_value=report.total_stock_value,
            cost_of_goods_consumed=report.cost_of_goods_consumed,
            low_stock_items=[row for row in rows if row.is_low_stock],
        )
