"""API tests for inventory, purchase and cost-of-sale endpoints."""

import pytest
from httpx import AsyncClient


@pytest.fixture
async def item_id(client: AsyncClient, staff_headers) -> int:
    response = await client.post(
        "/api/inventory",
        json={
            "name": "Clay",
            "unit": "kg",
            "current_stock": "10",
            "current_cost": "50",
            "reorder_level": "12",
        },
        headers=staff_headers,
    )
    assert response.status_code == 201
    return response.json()["id"]


class TestInventoryAPI:
    async def test_list_reports_value_and_low_stock(self, client: AsyncClient, item_id):
        body = (await client.get("/api/inventory")).json()

        assert body["total"] == 1
        assert body["total_stock_value"] == "500"
        assert body["low_stock_count"] == 1
        assert body["items"][0]["is_low_stock"] is True

    async def test_totals_ignore_paging(self, client: AsyncClient, staff_headers, item_id):
        await client.post(
            "/api/inventory",
            json={"name": "Glaze", "current_stock": "4", "current_cost": "25"},
            headers=staff_headers,
        )

        body = (await client.get("/api/inventory", params={"limit": 1})).json()

        assert len(body["items"]) == 1
        assert body["total"] == 2
        assert body["total_stock_value"] == "600"
        assert body["low_stock_count"] == 1

    async def test_detail_has_history_and_logs(self, client: AsyncClient, item_id):
        body = (await client.get(f"/api/inventory/{item_id}")).json()

        assert body["item"]["name"] == "Clay"
        assert body["price_history"][0]["old_price"] is None
        assert body["price_history"][0]["changed_by"] == "Priya"
        assert [log["action"] for log in body["logs"]] == ["CREATED"]

    async def test_manual_edit(self, client: AsyncClient, staff_headers, item_id):
        response = await client.patch(
            f"/api/inventory/{item_id}",
            json={"current_cost": "55", "reason": "Supplier hike"},
            headers=staff_headers,
        )

        assert response.status_code == 200
        assert response.json()["current_cost"] == "55"
        logs = (await client.get(f"/api/inventory/{item_id}/logs")).json()
        assert logs[0]["action"] == "PRICE_CHANGED"
        assert logs[0]["old_value"] == {"cost": "50"}

    async def test_delete_then_missing(self, client: AsyncClient, staff_headers, item_id):
        response = await client.delete(f"/api/inventory/{item_id}", headers=staff_headers)

        assert response.status_code == 200
        assert response.json()["deleted"] is True
        missing = await client.get(f"/api/inventory/{item_id}")
        assert missing.status_code == 404
        assert missing.json()["error_code"] == "INVENTORY_ITEM_NOT_FOUND"


class TestPurchaseAPI:
    async def test_purchase_requires_admin(self, client: AsyncClient, staff_headers, item_id):
        response = await client.post(
            f"/api/inventory/{item_id}/purchase",
            json={"quantity": "10", "total_cost": "700"},
            headers=staff_headers,
        )

        assert response.status_code == 403
        assert response.json()["error_code"] == "PERMISSION_DENIED"

    async def test_purchase_and_reverse(self, client: AsyncClient, admin_headers, item_id):
        purchased = await client.post(
            f"/api/inventory/{item_id}/purchase",
            json={"quantity": "10", "total_cost": "700", "supplier": "Clay Co"},
            headers=admin_headers,
        )

        assert purchased.status_code == 201
        body = purchased.json()
        assert body["new_stock"] == "20"
        assert body["new_unit_cost"] == "60"
        assert body["log"]["is_purchase"] is True
        assert body["log"]["supplier"] == "Clay Co"
        log_id = body["log"]["id"]

        purchases = (await client.get(f"/api/inventory/{item_id}/purchases")).json()
        assert [p["id"] for p in purchases] == [log_id]

        reversed_ = await client.delete(
            f"/api/inventory/{item_id}/purchase/{log_id}", headers=admin_headers
        )

        assert reversed_.status_code == 200
        body = reversed_.json()
        assert body["restored_stock"] == "10"
        assert body["restored_cost"] == "50"
        assert body["reversed_log_id"] == log_id
        assert "expense" in body["warning"]
        assert (await client.get(f"/api/inventory/{item_id}/purchases")).json() == []

    async def test_non_positive_purchase_rejected(
        self, client: AsyncClient, admin_headers, item_id
    ):
        response = await client.post(
            f"/api/inventory/{item_id}/purchase",
            json={"quantity": "0", "total_cost": "700"},
            headers=admin_headers,
        )
        assert response.status_code == 422

    async def test_reversing_non_purchase_is_bad_request(
        self, client: AsyncClient, admin_headers, item_id
    ):
        created_log = (await client.get(f"/api/inventory/{item_id}/logs")).json()[0]

        response = await client.delete(
            f"/api/inventory/{item_id}/purchase/{created_log['id']}", headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_OPERATION"

    async def test_reversing_missing_log(self, client: AsyncClient, admin_headers, item_id):
        response = await client.delete(
            f"/api/inventory/{item_id}/purchase/999", headers=admin_headers
        )
        assert response.status_code == 404


class TestCostOfSaleAPI:
    async def test_recipe_crud(self, client: AsyncClient, staff_headers, item_id):
        created = await client.post(
            "/api/cost-of-sale",
            json={"item_id": item_id, "quantity_per_person": "0.5"},
            headers=staff_headers,
        )
        assert created.status_code == 201
        cos_id = created.json()["id"]
        assert created.json()["item_name"] == "Clay"

        duplicate = await client.post(
            "/api/cost-of-sale",
            json={"item_id": item_id, "quantity_per_person": "1"},
            headers=staff_headers,
        )
        assert duplicate.status_code == 409

        updated = await client.patch(
            f"/api/cost-of-sale/{cos_id}",
            json={"quantity_per_person": "0.75"},
            headers=staff_headers,
        )
        assert updated.json()["quantity_per_person"] == "0.75"

        listing = (await client.get("/api/cost-of-sale")).json()
        assert listing["total"] == 1

        removed = await client.delete(f"/api/cost-of-sale/{cos_id}", headers=staff_headers)
        assert removed.status_code == 204
        missing = await client.delete(f"/api/cost-of-sale/{cos_id}", headers=staff_headers)
        assert missing.status_code == 404

    async def test_unknown_item(self, client: AsyncClient, staff_headers):
        response = await client.post(
            "/api/cost-of-sale",
            json={"item_id": 999, "quantity_per_person": "1"},
            headers=staff_headers,
        )
        assert response.status_code == 404
