"""
Record Purchase Use Case.

Stock IN with weighted-average cost.
"""

from studio.application.dto.requests import RecordPurchaseRequest
from studio.application.dto.responses import (
    InventoryItemResponse,
    InventoryLogResponse,
    PurchaseResponse,
)
from studio.application.services import (
    TransactionFactory,
    get_cost_ledger,
    get_default_transaction,
)
from studio.config import get_logger
from studio.core.entities.user import Caller
from studio.core.services import PurchaseRecord, WeightedAverageCostLedger

logger = get_logger(__name__)


class RecordPurchaseUseCase:
    """Record a purchase: new stock and cost, audit entry and expense together."""

    def __init__(
        self,
        ledger: WeightedAverageCostLedger | None = None,
        transaction: TransactionFactory | None = None,
    ):
        self._ledger = ledger
        self._transaction = transaction or get_default_transaction()

    async def _get_ledger(self) -> WeightedAverageCostLedger:
        if self._ledger is None:
            self._ledger = await get_cost_ledger()
        return self._ledger

    async def execute(
        self, item_id: int, request: RecordPurchaseRequest, user: Caller
    ) -> PurchaseRecord:
        """Execute record purchase use case."""
        logger.info(
            "record_purchase_started",
            item_id=item_id,
            quantity=str(request.quantity),
            total_cost=str(request.total_cost),
        )

        ledger = await self._get_ledger()
        async with self._transaction():
            return await ledger.record_purchase(
                item_id,
                request.quantity,
                request.total_cost,
                supplier=request.supplier or None,
                performed_by=user.id,
            )

    def to_response(self, result: PurchaseRecord) -> PurchaseResponse:
        """Convert result to API response."""
        return PurchaseResponse(
            item=InventoryItemResponse.from_entity(result.item),
            log=InventoryLogResponse.from_entity(result.log),
            expense_id=result.expense.id,  # type: ignore[arg-type]
            new_stock=result.item.current_stock,
            new_unit_cost=result.item.current_cost,
        )
