"""Integration tests for the ``seed_data`` management command."""

from io import StringIO

import pytest

from django.contrib.auth import get_user_model
from django.core.management import call_command

from modules.core.identity import CallerIdentity, Role
from modules.orders.models import Order, OrderItem

pytestmark = pytest.mark.integration

User = get_user_model()


def _run(**options) -> str:
    out = StringIO()
    call_command("seed_data", stdout=out, **options)
    return out.getvalue()


class TestSeedData:
    def test_creates_role_users(self):
        _run(orders=1)
        roles = {
            username: CallerIdentity.from_user(User.objects.get(username=username)).roles
            for username in ("admin", "manager", "user")
        }
        assert Role.ADMIN in roles["admin"]
        assert roles["manager"] == frozenset({Role.MANAGER})
        assert roles["user"] == frozenset({Role.USER})

    def test_orders_are_priced_from_items(self):
        output = _run(orders=3)

        assert "Seed completed" in output
        assert Order.objects.alive().count() == 3
        for order in Order.objects.alive():
            items = OrderItem.objects.alive().filter(order_id=order.id)
            assert items.exists()
            assert order.order_price == sum(i.total_price for i in items)

    def test_is_idempotent(self):
        _run(orders=2)
        _run(orders=2)
        assert Order.objects.count() == 2
        assert User.objects.filter(username="admin").count() == 1
