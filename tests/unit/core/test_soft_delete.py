"""Unit tests for BaseModel and SoftDeleteModel, exercised through Order."""

from __future__ import annotations

import uuid
from datetime import date

import pytest
from freezegun import freeze_time

from modules.orders.models import Order, OrderItem

pytestmark = pytest.mark.unit


def _order(number: str = "ON-0000000001") -> Order:
    return Order.objects.create(
        order_number=number,
        order_name="Soft delete",
        client_name="Client",
        order_term=date(2030, 1, 1),
        order_update_date=date(2024, 1, 1),
    )


class TestBaseModel:
    def test_id_is_uuid_version_7(self):
        order = _order()
        assert isinstance(order.id, uuid.UUID)
        assert order.id.version == 7

    def test_ids_are_time_ordered(self):
        a = _order("ON-0000000001")
        b = _order("ON-0000000002")
        assert str(a.id) < str(b.id)

    def test_save_with_update_fields_includes_updated_at(self):
        with freeze_time("2024-01-01 10:00:00"):
            order = _order()
        with freeze_time("2024-01-02 10:00:00"):
            order.order_name = "Renamed"
            order.save(update_fields=["order_name"])
        order.refresh_from_db()
        assert order.updated_at.date() == date(2024, 1, 2)


class TestSoftDeleteModel:
    def test_new_instance_is_not_deleted(self):
        assert not _order().is_deleted

    def test_delete_sets_deleted_at(self):
        order = _order()
        assert order.delete() == (1, {"orders.Order": 1})
        order.refresh_from_db()
        assert order.is_deleted
        assert order.deleted_at is not None

    def test_delete_keeps_the_row(self):
        order = _order()
        order.delete()
        assert Order.objects.filter(id=order.id).exists()

    def test_second_delete_is_noop(self):
        order = _order()
        order.delete()
        assert order.delete() == (0, {})

    def test_alive_and_dead_partition_rows(self):
        alive = _order("ON-0000000001")
        dead = _order("ON-0000000002")
        dead.delete()
        assert list(Order.objects.alive()) == [alive]
        assert list(Order.objects.dead()) == [dead]

    def test_bulk_delete_flags_only_alive_rows(self):
        order = _order()
        first = OrderItem.objects.create(
            order=order, item_name="a", item_update_date=date(2024, 1, 1)
        )
        OrderItem.objects.create(
            order=order, item_name="b", item_update_date=date(2024, 1, 1)
        )
        first.delete()

        count, _ = OrderItem.objects.filter(order=order).delete()

        assert count == 1
        assert OrderItem.objects.alive().count() == 0
        assert OrderItem.objects.count() == 2
