"""Reporting endpoints."""

from datetime import date

from fastapi import APIRouter, Depends

from studio.api.dependencies import get_inventory_report_use_case
from studio.application.dto.responses import InventoryReportResponse
from studio.application.use_cases import InventoryReportUseCase

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/inventory", response_model=InventoryReportResponse)
async def inventory_report(
    start_date: date | None = None,
    end_date: date | None = None,
    use_case: InventoryReportUseCase = Depends(get_inventory_report_use_case),
) -> InventoryReportResponse:
    """Stock valuation, low-stock items and consumption in the period."""
    report = await use_case.execute(start_date, end_date)
    return use_case.to_response(report)
