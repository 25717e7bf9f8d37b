"""
Cost-of-Sale Use Cases.

Maintain the per-person recipe.
"""

from studio.application.dto.requests import (
    CreateCostOfSaleItemRequest,
    UpdateCostOfSaleItemRequest,
)
from studio.application.dto.responses import CostOfSaleItemResponse, CostOfSaleListResponse
from studio.application.services import TransactionFactory, get_default_transaction
from studio.config import get_logger
from studio.core.entities.base import utc_now
from studio.core.entities.inventory import CostOfSaleItem
from studio.core.entities.user import Caller
from studio.core.exceptions import (
    CostOfSaleItemNotFoundError,
    DuplicateCostOfSaleItemError,
    InventoryItemNotFoundError,
)
from studio.core.interfaces import ICostOfSaleStore, IInventoryStore

logger = get_logger(__name__)


class ManageCostOfSaleUseCase:
    """
    Add, change and remove the items every booked person consumes.

    Recipe changes only affect bookings made or adjusted afterwards;
    restorations replay each booking's own log trail.
    """

    def __init__(
        self,
        cost_of_sale_store: ICostOfSaleStore | None = None,
        inventory_store: IInventoryStore | None = None,
        transaction: TransactionFactory | None = None,
    ):
        self._cost_of_sale_store = cost_of_sale_store
        self._inventory_store = inventory_store
        self._transaction = transaction or get_default_transaction()

    async def _get_cost_of_sale_store(self) -> ICostOfSaleStore:
        if self._cost_of_sale_store is None:
            from studio.infrastructure.storage.sqlite import get_cost_of_sale_store

            self._cost_of_sale_store = await get_cost_of_sale_store()
        return self._cost_of_sale_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from studio.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def list_items(self) -> list[CostOfSaleItem]:
        store = await self._get_cost_of_sale_store()
        return await store.list_items()

    async def add(self, request: CreateCostOfSaleItemRequest, user: Caller) -> CostOfSaleItem:
        """Add an item to the recipe. Each inventory item may appear once."""
        cos_store = await self._get_cost_of_sale_store()
        inv_store = await self._get_inventory_store()

        async with self._transaction():
            item = await inv_store.get_item(request.item_id)
            if item is None:
                raise InventoryItemNotFoundError(request.item_id)
            if await cos_store.get_by_item(request.item_id) is not None:
                raise DuplicateCostOfSaleItemError(request.item_id)

            cos_item = await cos_store.create(
                CostOfSaleItem(
                    item_id=request.item_id,
                    quantity_per_person=request.quantity_per_person,
                    item_name=item.name,
                    item_unit=item.unit,
                )
            )

        logger.info(
            "cost_of_sale_item_added",
            cos_id=cos_item.id,
            item_id=cos_item.item_id,
            quantity_per_person=str(cos_item.quantity_per_person),
            user_id=user.id,
        )
        return cos_item

    async def update(
        self, cos_id: int, request: UpdateCostOfSaleItemRequest, user: Caller
    ) -> CostOfSaleItem:
        cos_store = await self._get_cost_of_sale_store()

        async with self._transaction():
            cos_item = await cos_store.get(cos_id)
            if cos_item is None:
                raise CostOfSaleItemNotFoundError(cos_id)

            old_quantity = cos_item.quantity_per_person
            cos_item.quantity_per_person = request.quantity_per_person
            cos_item.updated_at = utc_now()
            cos_item = await cos_store.update(cos_item)

        logger.info(
            "cost_of_sale_item_updated",
            cos_id=cos_id,
            old_quantity=str(old_quantity),
            new_quantity=str(cos_item.quantity_per_person),
            user_id=user.id,
        )
        return cos_item

    async def remove(self, cos_id: int, user: Caller) -> None:
        cos_store = await self._get_cost_of_sale_store()

        async with self._transaction():
            if not await cos_store.delete(cos_id):
                raise CostOfSaleItemNotFoundError(cos_id)

        logger.info("cost_of_sale_item_removed", cos_id=cos_id, user_id=user.id)

    def to_response(self, cos_item: CostOfSaleItem) -> CostOfSaleItemResponse:
        return CostOfSaleItemResponse.from_entity(cos_item)

    def to_list_response(self, items: list[CostOfSaleItem]) -> CostOfSaleListResponse:
        return CostOfSaleListResponse(
            items=[CostOfSaleItemResponse.from_entity(i) for i in items],
            total=len(items),
        )
