"""Studio settings endpoints."""

from fastapi import APIRouter, Depends

from studio.api.dependencies import (
    get_settings_repo,
    get_update_settings_use_case,
    require_admin,
)
from studio.application.dto.requests import UpdateSettingsRequest
from studio.application.dto.responses import ErrorResponse, SettingsResponse
from studio.application.use_cases import UpdateSettingsUseCase
from studio.core.entities.user import Caller
from studio.core.interfaces import ISettingsStore

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse)
async def get_app_settings(
    store: ISettingsStore = Depends(get_settings_repo),
) -> SettingsResponse:
    settings = await store.get_or_create()
    return SettingsResponse.from_entity(settings)


@router.put(
    "",
    response_model=SettingsResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def update_app_settings(
    request: UpdateSettingsRequest,
    user: Caller = Depends(require_admin),
    use_case: UpdateSettingsUseCase = Depends(get_update_settings_use_case),
) -> SettingsResponse:
    """Update currency, capacity ceiling or class timetable (admin only)."""
    settings = await use_case.execute(request, user)
    return use_case.to_response(settings)
