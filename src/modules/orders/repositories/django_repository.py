"""Django ORM implementations of the Order and OrderItem repositories.

Satisfy ``IOrderRepository`` / ``IOrderItemRepository`` using Django's
QuerySet API.  Look-ups follow the Null Object pattern: they return
``None`` for missing, soft-deleted or malformed ids and leave it to the
Service Layer to raise the matching domain error.

Concurrency control on price recomputation uses ``select_for_update()``
on the order row; the services open the surrounding transaction.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models.functions import Lower

from modules.orders.constants import ORDER_SORT
from modules.orders.filters import OrderItemSearchFilter, OrderSearchFilter
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import (
    IOrderItemRepository,
    IOrderRepository,
)

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve a live order by primary key."""
        try:
            return Order.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve a live order with a row-level lock (SELECT FOR UPDATE).

        Must be called inside ``transaction.atomic``.
        """
        try:
            return Order.objects.select_for_update().alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List live orders in display order.

        ``filters`` accepts plain Django look-ups, e.g.
        ``{"order_status": "Pending"}``.
        """
        queryset = Order.objects.alive().order_by(*ORDER_SORT)
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def search(self, term: str) -> List[Order]:
        queryset = Order.objects.alive().order_by(*ORDER_SORT)
        return list(OrderSearchFilter(data={"q": term}, queryset=queryset).qs)

    def exists_by_order_number(self, order_number: str) -> bool:
        return Order.objects.filter(order_number=order_number).exists()

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist (create or update) an order."""
        is_new = entity._state.adding
        entity.save()
        logger.info(
            "order.saved",
            order_id=str(entity.id),
            order_number=entity.order_number,
            is_new=is_new,
        )
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Soft-delete an order by ID (items are handled by the caller)."""
        order = self.get_by_id(id)
        if not order:
            return False
        order.delete()
        logger.info("order.soft_deleted", order_id=str(id))
        return True


class OrderItemDjangoRepository(IOrderItemRepository):
    """Concrete OrderItem repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[OrderItem]:
        """Retrieve a live item by primary key."""
        try:
            return OrderItem.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[OrderItem]:
        queryset = OrderItem.objects.alive().order_by(Lower("item_name"), "id")
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def list_for_order(self, order_id: str) -> List[OrderItem]:
        return self.list({"order_id": order_id})

    def search_for_order(self, order_id: str, pattern: str) -> List[OrderItem]:
        queryset = (
            OrderItem.objects.alive()
            .filter(order_id=order_id)
            .order_by(Lower("item_name"), "id")
        )
        return list(OrderItemSearchFilter(data={"name": pattern}, queryset=queryset).qs)

    @transaction.atomic
    def save(self, entity: OrderItem) -> OrderItem:
        """Persist (create or update) an item; ``total_price`` is derived on save."""
        is_new = entity._state.adding
        entity.save()
        logger.info(
            "order_item.saved",
            item_id=str(entity.id),
            order_id=str(entity.order_id),
            total_price=str(entity.total_price),
            is_new=is_new,
        )
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        item = self.get_by_id(id)
        if not item:
            return False
        item.delete()
        logger.info("order_item.soft_deleted", item_id=str(id), order_id=str(item.order_id))
        return True

    @transaction.atomic
    def delete_for_order(self, order_id: str) -> int:
        count, _ = OrderItem.objects.filter(order_id=order_id).delete()
        logger.info("order_item.cascade_soft_deleted", order_id=str(order_id), count=count)
        return count
