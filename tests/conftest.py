from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group

from rest_framework.test import APIClient

from modules.core.identity import CallerIdentity, Role
from modules.orders.dtos import OrderDataDTO, OrderItemDataDTO
from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    OrderItemDjangoRepository,
)
from modules.orders.services import OrderItemService, OrderService

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Users and roles
# ---------------------------------------------------------------------------


def _user_with_role(username: str, role: Role):
    user = User.objects.create_user(username=username, password="testpass123")
    group, _ = Group.objects.get_or_create(name=role.value)
    user.groups.add(group)
    return user


@pytest.fixture()
def viewer_user():
    return _user_with_role("viewer", Role.USER)


@pytest.fixture()
def manager_user():
    return _user_with_role("manager", Role.MANAGER)


@pytest.fixture()
def viewer_client(viewer_user):
    """APIClient authenticated as a read-only USER."""
    client = APIClient()
    client.force_authenticate(user=viewer_user)
    return client


@pytest.fixture()
def manager_client(manager_user):
    """APIClient authenticated as a MANAGER (read + write)."""
    client = APIClient()
    client.force_authenticate(user=manager_user)
    return client


@pytest.fixture()
def caller():
    return CallerIdentity(username="tester", roles=frozenset({Role.MANAGER}))


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


@pytest.fixture()
def order_repo():
    return OrderDjangoRepository()


@pytest.fixture()
def item_repo():
    return OrderItemDjangoRepository()


@pytest.fixture()
def order_service(order_repo, item_repo):
    return OrderService(order_repository=order_repo, item_repository=item_repo)


@pytest.fixture()
def item_service(order_repo, item_repo):
    return OrderItemService(order_repository=order_repo, item_repository=item_repo)


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


def make_order_dto(**overrides) -> OrderDataDTO:
    data = {
        "order_name": "Office refit",
        "client_name": "Ana Souza",
        "client_phone_number": "555-0101",
        "client_email": "ana@example.com",
        "order_term": date(2030, 1, 31),
        "order_status": "Pending",
        "comments": "",
    }
    data.update(overrides)
    return OrderDataDTO(**data)


def make_item_dto(**overrides) -> OrderItemDataDTO:
    data = {
        "item_name": "Widget",
        "item_code": "W-1",
        "item_revision": "A",
        "item_count": 2,
        "item_price": Decimal("10.00"),
        "link_to_img": "",
    }
    data.update(overrides)
    return OrderItemDataDTO(**data)


@pytest.fixture()
def order(order_service, caller):
    """A persisted, live order without items."""
    return order_service.create_order(make_order_dto(), caller=caller)
