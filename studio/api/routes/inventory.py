"""Inventory management endpoints."""

from fastapi import APIRouter, Depends, Query, status

from studio.api.dependencies import (
    get_audit,
    get_create_inventory_item_use_case,
    get_delete_inventory_item_use_case,
    get_inventory_repo,
    get_record_purchase_use_case,
    get_reverse_purchase_use_case,
    get_update_inventory_item_use_case,
    require_admin,
    require_user,
)
from studio.application.dto.requests import (
    CreateInventoryItemRequest,
    RecordPurchaseRequest,
    UpdateInventoryItemRequest,
)
from studio.application.dto.responses import (
    ErrorResponse,
    InventoryItemDeletedResponse,
    InventoryItemDetailResponse,
    InventoryItemResponse,
    InventoryListResponse,
    InventoryLogResponse,
    PriceHistoryResponse,
    PurchaseResponse,
    ReversePurchaseResponse,
)
from studio.application.use_cases import (
    CreateInventoryItemUseCase,
    DeleteInventoryItemUseCase,
    RecordPurchaseUseCase,
    ReversePurchaseUseCase,
    UpdateInventoryItemUseCase,
)
from studio.core.entities.user import Caller
from studio.core.exceptions import InventoryItemNotFoundError
from studio.core.interfaces import IInventoryStore
from studio.core.services import AuditLog

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("", response_model=InventoryListResponse)
async def list_items(
    limit: int = Query(default=500, gt=0, le=1000),
    offset: int = Query(default=0, ge=0),
    store: IInventoryStore = Depends(get_inventory_repo),
) -> InventoryListResponse:
    """List active inventory items ordered by name. Totals cover every active item."""
    items = await store.list_items(limit=limit, offset=offset)
    summary = await store.get_summary()
    return InventoryListResponse(
        items=[InventoryItemResponse.from_entity(item) for item in items],
        total=summary.total_items,
        total_stock_value=summary.total_stock_value,
        low_stock_count=summary.low_stock_count,
    )


@router.post(
    "",
    response_model=InventoryItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={401: {"model": ErrorResponse}},
)
async def create_item(
    request: CreateInventoryItemRequest,
    user: Caller = Depends(require_user),
    use_case: CreateInventoryItemUseCase = Depends(get_create_inventory_item_use_case),
) -> InventoryItemResponse:
    result = await use_case.execute(request, user)
    return use_case.to_response(result)


@router.get(
    "/{item_id}",
    response_model=InventoryItemDetailResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_item(
    item_id: int,
    log_limit: int = Query(default=50, gt=0, le=500),
    store: IInventoryStore = Depends(get_inventory_repo),
    audit: AuditLog = Depends(get_audit),
) -> InventoryItemDetailResponse:
    """Item with its price history and most recent audit entries."""
    item = await store.get_item(item_id)
    if item is None:
        raise InventoryItemNotFoundError(item_id)
    history = await store.get_price_history(item_id)
    logs = await audit.list_logs(item_id, limit=log_limit)
    return InventoryItemDetailResponse(
        item=InventoryItemResponse.from_entity(item),
        price_history=[PriceHistoryResponse.from_entity(h) for h in history],
        logs=[InventoryLogResponse.from_entity(log) for log in logs],
    )


@router.patch(
    "/{item_id}",
    response_model=InventoryItemResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_item(
    item_id: int,
    request: UpdateInventoryItemRequest,
    user: Caller = Depends(require_user),
    use_case: UpdateInventoryItemUseCase = Depends(get_update_inventory_item_use_case),
) -> InventoryItemResponse:
    result = await use_case.execute(item_id, request, user)
    return use_case.to_response(result)


@router.delete(
    "/{item_id}",
    response_model=InventoryItemDeletedResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_item(
    item_id: int,
    user: Caller = Depends(require_user),
    use_case: DeleteInventoryItemUseCase = Depends(get_delete_inventory_item_use_case),
) -> InventoryItemDeletedResponse:
    """Soft-delete an item and drop it from the cost-of-sale recipe."""
    result = await use_case.execute(item_id, user)
    return use_case.to_response(result)


@router.get(
    "/{item_id}/logs",
    response_model=list[InventoryLogResponse],
)
async def list_logs(
    item_id: int,
    limit: int = Query(default=100, gt=0, le=1000),
    audit: AuditLog = Depends(get_audit),
) -> list[InventoryLogResponse]:
    """Audit entries of an item, newest first."""
    logs = await audit.list_logs(item_id, limit=limit)
    return [InventoryLogResponse.from_entity(log) for log in logs]


@router.get(
    "/{item_id}/purchases",
    response_model=list[InventoryLogResponse],
)
async def list_purchases(
    item_id: int,
    audit: AuditLog = Depends(get_audit),
) -> list[InventoryLogResponse]:
    """Purchases of an item that can still be reversed, newest first."""
    logs = await audit.list_purchases(item_id)
    return [InventoryLogResponse.from_entity(log) for log in logs]


@router.post(
    "/{item_id}/purchase",
    response_model=PurchaseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def record_purchase(
    item_id: int,
    request: RecordPurchaseRequest,
    user: Caller = Depends(require_admin),
    use_case: RecordPurchaseUseCase = Depends(get_record_purchase_use_case),
) -> PurchaseResponse:
    """Record a purchase with weighted-average cost recalculation."""
    result = await use_case.execute(item_id, request, user)
    return use_case.to_response(result)


@router.delete(
    "/{item_id}/purchase/{log_id}",
    response_model=ReversePurchaseResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def reverse_purchase(
    item_id: int,
    log_id: int,
    user: Caller = Depends(require_admin),
    use_case: ReversePurchaseUseCase = Depends(get_reverse_purchase_use_case),
) -> ReversePurchaseResponse:
    """Reverse a purchase. The matching expense must be removed by hand."""
    result = await use_case.execute(item_id, log_id, user)
    return use_case.to_response(result)
