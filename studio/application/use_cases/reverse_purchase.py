"""Reverse Purchase Use Case."""

from studio.application.dto.responses import (
    InventoryItemResponse,
    InventoryLogResponse,
    ReversePurchaseResponse,
)
from studio.application.services import (
    TransactionFactory,
    get_default_transaction,
    get_purchase_reversal,
)
from studio.core.entities.user import Caller
from studio.core.services import PurchaseReversal, ReversalRecord


class ReversePurchaseUseCase:
    """Undo a purchase from its audit snapshot."""

    def __init__(
        self,
        reversal: PurchaseReversal | None = None,
        transaction: TransactionFactory | None = None,
    ):
        self._reversal = reversal
        self._transaction = transaction or get_default_transaction()

    async def _get_reversal(self) -> PurchaseReversal:
        if self._reversal is None:
            self._reversal = await get_purchase_reversal()
        return self._reversal

    async def execute(self, item_id: int, log_id: int, user: Caller) -> ReversalRecord:
        reversal = await self._get_reversal()
        async with self._transaction():
            return await reversal.reverse_purchase(item_id, log_id, performed_by=user.id)

    def to_response(self, result: ReversalRecord) -> ReversePurchaseResponse:
        return ReversePurchaseResponse(
            item=InventoryItemResponse.from_entity(result.item),
            log=InventoryLogResponse.from_entity(result.log),
            reversed_log_id=result.reversed_log.id,  # type: ignore[arg-type]
            restored_stock=result.item.current_stock,
            restored_cost=result.item.current_cost,
            warning=result.warning,
        )
