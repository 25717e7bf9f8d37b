"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from studio.application.dto.requests import (
    ClassTimingRequest,
    CreateBookingRequest,
    CreateCostOfSaleItemRequest,
    CreateInventoryItemRequest,
    RecordPurchaseRequest,
    UpdateBookingRequest,
    UpdateCostOfSaleItemRequest,
    UpdateInventoryItemRequest,
    UpdateSettingsRequest,
)
from studio.application.dto.responses import (
    BookingDeletedResponse,
    BookingListResponse,
    BookingMutationResponse,
    BookingResponse,
    CapacityCheckResponse,
    CostOfSaleItemResponse,
    CostOfSaleListResponse,
    DayCapacityResponse,
    ErrorResponse,
    HealthResponse,
    InventoryItemDeletedResponse,
    InventoryItemDetailResponse,
    InventoryItemResponse,
    InventoryListResponse,
    InventoryLogResponse,
    InventoryReportItemResponse,
    InventoryReportResponse,
    PriceHistoryResponse,
    PurchaseResponse,
    ReversePurchaseResponse,
    SessionCapacityResponse,
    SettingsResponse,
)

__all__ = [
    # Requests
    "ClassTimingRequest",
    "CreateBookingRequest",
    "CreateCostOfSaleItemRequest",
    "CreateInventoryItemRequest",
    "RecordPurchaseRequest",
    "UpdateBookingRequest",
    "UpdateCostOfSaleItemRequest",
    "UpdateInventoryItemRequest",
    "UpdateSettingsRequest",
    # Responses
    "BookingDeletedResponse",
    "BookingListResponse",
    "BookingMutationResponse",
    "BookingResponse",
    "CapacityCheckResponse",
    "CostOfSaleItemResponse",
    "CostOfSaleListResponse",
    "DayCapacityResponse",
    "ErrorResponse",
    "HealthResponse",
    "InventoryItemDeletedResponse",
    "InventoryItemDetailResponse",
    "InventoryItemResponse",
    "InventoryListResponse",
    "InventoryLogResponse",
    "InventoryReportItemResponse",
    "InventoryReportResponse",
    "PriceHistoryResponse",
    "PurchaseResponse",
    "ReversePurchaseResponse",
    "SessionCapacityResponse",
    "SettingsResponse",
]
