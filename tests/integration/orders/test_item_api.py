"""Integration tests for order item endpoints."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from tests.conftest import make_item_dto

pytestmark = pytest.mark.integration

ITEM_PAYLOAD = {
    "item_name": "Widget",
    "item_code": "W-1",
    "item_revision": "A",
    "item_count": 2,
    "item_price": "10.00",
    "link_to_img": None,
}


def _items_url(order_id) -> str:
    return f"/api/v1/orders/{order_id}/items/"


def _item_url(item_id) -> str:
    return f"/api/v1/order-items/{item_id}/"


class TestAddItem:
    def test_returns_201_with_derived_total(self, manager_client, order):
        response = manager_client.post(_items_url(order.id), ITEM_PAYLOAD, format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["order_id"] == str(order.id)
        assert body["total_price"] == "20.00"
        assert body["link_to_img"] == ""
        order.refresh_from_db()
        assert order.order_price == Decimal("20.00")

    def test_client_total_ignored(self, manager_client, order):
        payload = {**ITEM_PAYLOAD, "total_price": "1.00"}
        response = manager_client.post(_items_url(order.id), payload, format="json")
        assert response.json()["total_price"] == "20.00"

    def test_negative_price_rejected(self, manager_client, order):
        payload = {**ITEM_PAYLOAD, "item_price": "-1.00"}
        response = manager_client.post(_items_url(order.id), payload, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "item_price"
        order.refresh_from_db()
        assert order.order_price == Decimal("0.00")

    def test_missing_count_rejected(self, manager_client, order):
        payload = {k: v for k, v in ITEM_PAYLOAD.items() if k != "item_count"}
        response = manager_client.post(_items_url(order.id), payload, format="json")
        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "item_count"

    def test_unknown_order_is_404(self, manager_client):
        response = manager_client.post(_items_url(uuid4()), ITEM_PAYLOAD, format="json")
        assert response.status_code == 404


class TestReadItems:
    def test_list_sorted_by_name(self, viewer_client, item_service, order, caller):
        for name in ("pear", "Apple", "fig"):
            item_service.add_item(str(order.id), make_item_dto(item_name=name), caller=caller)

        response = viewer_client.get(_items_url(order.id))

        assert response.status_code == 200
        assert [i["item_name"] for i in response.json()] == ["Apple", "fig", "pear"]

    def test_search(self, viewer_client, item_service, order, caller):
        item_service.add_item(str(order.id), make_item_dto(item_name="Hex bolt"), caller=caller)
        item_service.add_item(str(order.id), make_item_dto(item_name="Washer"), caller=caller)

        response = viewer_client.get(_items_url(order.id), {"search": "BOLT"})

        assert [i["item_name"] for i in response.json()] == ["Hex bolt"]

    def test_list_unknown_order_is_404(self, viewer_client):
        assert viewer_client.get(_items_url(uuid4())).status_code == 404

    def test_retrieve(self, viewer_client, item_service, order, caller):
        item = item_service.add_item(str(order.id), make_item_dto(), caller=caller)
        response = viewer_client.get(_item_url(item.id))
        assert response.status_code == 200
        assert response.json()["item_name"] == "Widget"

    def test_retrieve_unknown_is_404(self, viewer_client):
        response = viewer_client.get(_item_url(uuid4()))
        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "not_found"


class TestUpdateAndDeleteItem:
    def test_put_recomputes_order(self, manager_client, item_service, order, caller):
        item = item_service.add_item(str(order.id), make_item_dto(), caller=caller)

        response = manager_client.put(
            _item_url(item.id), {**ITEM_PAYLOAD, "item_count": 3}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["total_price"] == "30.00"
        order.refresh_from_db()
        assert order.order_price == Decimal("30.00")

    def test_put_unknown_is_404(self, manager_client):
        response = manager_client.put(_item_url(uuid4()), ITEM_PAYLOAD, format="json")
        assert response.status_code == 404

    def test_delete(self, manager_client, item_service, order, caller):
        item = item_service.add_item(str(order.id), make_item_dto(), caller=caller)

        response = manager_client.delete(_item_url(item.id))

        assert response.status_code == 204
        assert manager_client.get(_item_url(item.id)).status_code == 404
        order.refresh_from_db()
        assert order.order_price == Decimal("0.00")


class TestTotalLimits:
    def test_line_total_overflow_is_400(self, manager_client, order):
        payload = {**ITEM_PAYLOAD, "item_count": 1_000_000_000, "item_price": "99999999.99"}
        response = manager_client.post(_items_url(order.id), payload, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "item_price"
        order.refresh_from_db()
        assert order.order_price == Decimal("0.00")

    def test_count_out_of_range_is_400(self, manager_client, order):
        payload = {**ITEM_PAYLOAD, "item_count": 2**63}
        response = manager_client.post(_items_url(order.id), payload, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "item_count"

    def test_order_total_overflow_is_400(self, manager_client, order):
        payload = {**ITEM_PAYLOAD, "item_count": 100, "item_price": "99999999.99"}
        first = manager_client.post(_items_url(order.id), payload, format="json")
        second = manager_client.post(_items_url(order.id), payload, format="json")

        assert first.status_code == 201
        assert second.status_code == 400
        body = second.json()
        assert body["type"] == "client_error"
        assert body["errors"][0]["code"] == "validation_error"
        assert body["errors"][0]["attr"] == "item_count"
        assert len(manager_client.get(_items_url(order.id)).json()) == 1
