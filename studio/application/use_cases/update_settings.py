"""Update Settings Use Case."""

from studio.application.dto.requests import UpdateSettingsRequest
from studio.application.dto.responses import SettingsResponse
from studio.application.services import TransactionFactory, get_default_transaction
from studio.config import get_logger
from studio.core.entities.app_settings import AppSettings, ClassTiming
from studio.core.entities.base import utc_now
from studio.core.entities.user import Caller
from studio.core.interfaces import ISettingsStore

logger = get_logger(__name__)


class UpdateSettingsUseCase:
    """Change currency, capacity ceiling or class timetable."""

    def __init__(
        self,
        settings_store: ISettingsStore | None = None,
        transaction: TransactionFactory | None = None,
    ):
        self._settings_store = settings_store
        self._transaction = transaction or get_default_transaction()

    async def _get_settings_store(self) -> ISettingsStore:
        if self._settings_store is None:
            from studio.infrastructure.storage.sqlite import get_settings_store

            self._settings_store = await get_settings_store()
        return self._settings_store

    async def execute(self, request: UpdateSettingsRequest, user: Caller) -> AppSettings:
        """
        Execute update settings use case.

        A lower capacity ceiling does not touch existing bookings; it only
        applies to later checks.
        """
        store = await self._get_settings_store()

        async with self._transaction():
            settings = await store.get_or_create()
            if request.currency is not None:
                settings.currency = request.currency
            if request.max_persons_per_class is not None:
                settings.max_persons_per_class = request.max_persons_per_class
            if request.class_timings is not None:
                settings.class_timings = [
                    ClassTiming(**timing.model_dump()) for timing in request.class_timings
                ]
            settings.updated_at = utc_now()
            settings = await store.save(settings)

        logger.info(
            "settings_updated",
            currency=settings.currency.value,
            max_persons_per_class=settings.max_persons_per_class,
            class_timings=len(settings.class_timings),
            user_id=user.id,
        )
        return settings

    def to_response(self, settings: AppSettings) -> SettingsResponse:
        return SettingsResponse.from_entity(settings)
