"""Cost-of-sale recipe endpoints."""

from fastapi import APIRouter, Depends, status

from studio.api.dependencies import get_manage_cost_of_sale_use_case, require_user
from studio.application.dto.requests import (
    CreateCostOfSaleItemRequest,
    UpdateCostOfSaleItemRequest,
)
from studio.application.dto.responses import (
    CostOfSaleItemResponse,
    CostOfSaleListResponse,
    ErrorResponse,
)
from studio.application.use_cases import ManageCostOfSaleUseCase
from studio.core.entities.user import Caller

router = APIRouter(prefix="/api/cost-of-sale", tags=["cost-of-sale"])


@router.get("", response_model=CostOfSaleListResponse)
async def list_cost_of_sale_items(
    use_case: ManageCostOfSaleUseCase = Depends(get_manage_cost_of_sale_use_case),
) -> CostOfSaleListResponse:
    """Items consumed per booked person."""
    items = await use_case.list_items()
    return use_case.to_list_response(items)


@router.post(
    "",
    response_model=CostOfSaleItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def add_cost_of_sale_item(
    request: CreateCostOfSaleItemRequest,
    user: Caller = Depends(require_user),
    use_case: ManageCostOfSaleUseCase = Depends(get_manage_cost_of_sale_use_case),
) -> CostOfSaleItemResponse:
    cos_item = await use_case.add(request, user)
    return use_case.to_response(cos_item)


@router.patch(
    "/{cos_id}",
    response_model=CostOfSaleItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_cost_of_sale_item(
    cos_id: int,
    request: UpdateCostOfSaleItemRequest,
    user: Caller = Depends(require_user),
    use_case: ManageCostOfSaleUseCase = Depends(get_manage_cost_of_sale_use_case),
) -> CostOfSaleItemResponse:
    cos_item = await use_case.update(cos_id, request, user)
    return use_case.to_response(cos_item)


@router.delete(
    "/{cos_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def remove_cost_of_sale_item(
    cos_id: int,
    user: Caller = Depends(require_user),
    use_case: ManageCostOfSaleUseCase = Depends(get_manage_cost_of_sale_use_case),
) -> None:
    await use_case.remove(cos_id, user)
