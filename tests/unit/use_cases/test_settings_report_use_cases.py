"""Tests for settings and reporting use cases."""

from datetime import date, datetime, time
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from studio.application.dto.requests import ClassTimingRequest, UpdateSettingsRequest
from studio.application.use_cases import InventoryReportUseCase, UpdateSettingsUseCase
from studio.core.entities.app_settings import AppSettings, Currency
from studio.core.entities.booking import SessionTime
from studio.core.entities.inventory import InventoryItem
from studio.core.entities.inventory_log import (
    AutoConsumedLog,
    InventoryAction,
    StockSnapshot,
)
from studio.core.exceptions import ValidationError


class TestUpdateSettingsUseCase:
    @pytest.fixture
    def settings_store(self):
        store = AsyncMock()
        store.get_or_create.return_value = AppSettings()

        async def save(settings):
            return settings

        store.save.side_effect = save
        return store

    async def test_partial_update_keeps_other_fields(self, settings_store, admin, transaction):
        use_case = UpdateSettingsUseCase(settings_store=settings_store, transaction=transaction)

        settings = await use_case.execute(UpdateSettingsRequest(max_persons_per_class=6), admin)

        assert settings.max_persons_per_class == 6
        assert settings.currency == Currency.INR
        settings_store.save.assert_awaited_once()

    async def test_replaces_class_timings(self, settings_store, admin, transaction):
        use_case = UpdateSettingsUseCase(settings_store=settings_store, transaction=transaction)
        request = UpdateSettingsRequest(
            currency=Currency.USD,
            class_timings=[
                ClassTimingRequest(
                    day_of_week=5,
                    session_time=SessionTime.SESSION_1,
                    start_time=time(10, 0),
                    end_time=time(12, 0),
                )
            ],
        )

        response = use_case.to_response(await use_case.execute(request, admin))

        assert response.currency == "USD"
        assert response.currency_symbol == "$"
        assert len(response.class_timings) == 1
        assert response.class_timings[0].session_time == "SESSION_1"

    def test_timing_must_end_after_start(self):
        with pytest.raises(ValueError):
            ClassTimingRequest(
                day_of_week=0,
                session_time=SessionTime.SESSION_2,
                start_time=time(15, 0),
                end_time=time(14, 0),
            )


def _consumed(item_id: int, quantity: str, booking_id: int = 1) -> AutoConsumedLog:
    return AutoConsumedLog(
        item_id=item_id,
        booking_id=booking_id,
        quantity=Decimal(quantity),
        old_value=StockSnapshot(stock=Decimal("0")),
        new_value=StockSnapshot(stock=Decimal(quantity)),
    )


class TestInventoryReportUseCase:
    @pytest.fixture
    def inventory_store(self):
        store = AsyncMock()
        store.list_items.return_value = [
            InventoryItem(
                id=1,
                name="Clay",
                unit="kg",
                current_stock=Decimal("4"),
                current_cost=Decimal("50"),
                reorder_level=Decimal("5"),
            ),
            InventoryItem(
                id=2,
                name="Glaze",
                unit="ml",
                current_stock=Decimal("100"),
                current_cost=Decimal("2"),
            ),
        ]
        return store

    @pytest.fixture
    def log_store(self):
        store = AsyncMock()
        store.list_logs_between.return_value = [
            _consumed(1, "-6"),
            _consumed(1, "2"),
            _consumed(2, "-30"),
        ]
        return store

    async def test_nets_consumption_and_values_it(self, inventory_store, log_store):
        use_case = InventoryReportUseCase(inventory_store=inventory_store, log_store=log_store)

        report = await use_case.execute()

        by_item = {line.item.id: line for line in report.lines}
        assert by_item[1].consumed_quantity == Decimal("4")
        assert by_item[1].consumed_value == Decimal("200")
        assert by_item[2].consumed_quantity == Decimal("30")
        assert report.cost_of_goods_consumed == Decimal("260")
        assert report.total_stock_value == Decimal("400")

    async def test_date_range_is_inclusive(self, inventory_store, log_store):
        use_case = InventoryReportUseCase(inventory_store=inventory_store, log_store=log_store)

        await use_case.execute(date(2026, 5, 1), date(2026, 5, 31))

        log_store.list_logs_between.assert_awaited_once_with(
            start=datetime(2026, 5, 1),
            end=datetime(2026, 6, 1),
            action=InventoryAction.AUTO_CONSUMED,
        )

    async def test_end_before_start_rejected(self, inventory_store, log_store):
        use_case = InventoryReportUseCase(inventory_store=inventory_store, log_store=log_store)

        with pytest.raises(ValidationError):
            await use_case.execute(date(2026, 5, 31), date(2026, 5, 1))

    async def test_response_lists_low_stock(self, inventory_store, log_store):
        use_case = InventoryReportUseCase(inventory_store=inventory_store, log_store=log_store)

        response = use_case.to_response(await use_case.execute())

        assert [row.name for row in response.low_stock_items] == ["Clay"]
        assert len(response.items) == 2
