"""Order service layer (Use Cases).

Orchestrates the consistency rules between an order and its line items.
All write operations are atomic: the service defines the unit-of-work
boundary.

Rules enforced:
- ``order_number`` is generated once, at creation, and never reused.
- ``order_price`` always equals the sum of the live items' totals; it is
  recomputed from scratch after every item add/update/delete and on
  order update, with the order row locked (SELECT FOR UPDATE).
- Every change stamps the affected ``*_update_date`` with today's date.
- Deleting an order soft-deletes every live item it owns in the same
  transaction.  Deleted orders and items are reported as not found.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog
from django.db import transaction
from django.utils import timezone

from modules.core.exceptions import InvalidInput
from modules.orders.constants import MAX_TOTAL_PRICE, ZERO_PRICE
from modules.orders.exceptions import OrderItemNotFound, OrderNotFound
from modules.orders.models import Order, OrderItem
from modules.orders.numbering import OrderNumberGenerator
from modules.orders.pricing import PriceAggregator

if TYPE_CHECKING:
    from modules.core.identity import CallerIdentity
    from modules.orders.dtos import OrderDataDTO, OrderItemDataDTO
    from modules.orders.repositories.interfaces import (
        IOrderItemRepository,
        IOrderRepository,
    )

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).  The number
    generator and price aggregator are built from those repositories
    unless supplied.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        item_repository: IOrderItemRepository,
        number_generator: Optional[OrderNumberGenerator] = None,
        price_aggregator: Optional[PriceAggregator] = None,
    ) -> None:
        self._order_repo = order_repository
        self._item_repo = item_repository
        self._numbers = number_generator or OrderNumberGenerator(order_repository)
        self._pricing = price_aggregator or PriceAggregator(item_repository)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: OrderDataDTO, *, caller: CallerIdentity) -> Order:
        """Create an order with a fresh order number and a zero price.

        Raises:
            OrderNumberGenerationExhausted: no free order number was found.
        """
        log = logger.bind(actor=caller.username)
        log.info("order.creation_started")

        order = Order(
            **dto.to_fields(),
            order_number=self._numbers.generate(),
            order_price=ZERO_PRICE,
            order_update_date=timezone.localdate(),
        )
        self._order_repo.save(order)

        log.info(
            "order.created", order_id=str(order.id), order_number=order.order_number
        )
        return order

    @transaction.atomic
    def update_order(
        self, order_id: str, dto: OrderDataDTO, *, caller: CallerIdentity
    ) -> Order:
        """Overwrite the descriptive fields of an order.

        The price is recomputed from the live items and the update date
        regenerated; ``order_number`` never changes.

        Raises:
            OrderNotFound: order does not exist or was deleted.
        """
        order = self._order_repo.get_for_update(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")

        for name, value in dto.to_fields().items():
            setattr(order, name, value)
        order.order_price = self._pricing.compute_total(str(order.id))
        order.order_update_date = timezone.localdate()
        self._order_repo.save(order)

        logger.info(
            "order.updated",
            order_id=str(order.id),
            order_price=str(order.order_price),
            actor=caller.username,
        )
        return order

    @transaction.atomic
    def delete_order(self, order_id: str, *, caller: CallerIdentity) -> None:
        """Soft-delete an order together with every live item it owns.

        Raises:
            OrderNotFound: order does not exist or was already deleted.
        """
        order = self._order_repo.get_for_update(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")

        items_deleted = self._item_repo.delete_for_order(str(order.id))
        self._order_repo.delete(str(order.id))

        logger.info(
            "order.deleted",
            order_id=str(order.id),
            items_deleted=items_deleted,
            actor=caller.username,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str, *, caller: CallerIdentity) -> Order:
        """Retrieve a single live order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(self, *, caller: CallerIdentity) -> List[Order]:
        """Live orders, most recently updated first."""
        return self._order_repo.list()

    def search_orders(self, term: str, *, caller: CallerIdentity) -> List[Order]:
        """Live orders where ``term`` appears in any searchable field.

        A blank term returns the same result as ``list_orders``.
        """
        term = (term or "").strip()
        if not term:
            return self.list_orders(caller=caller)
        return self._order_repo.search(term)


class OrderItemService:
    """Application service for order line items.

    Every mutation locks the owning order first, then reads and writes
    items, then rewrites the order's cached price and update date.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        item_repository: IOrderItemRepository,
        price_aggregator: Optional[PriceAggregator] = None,
    ) -> None:
        self._order_repo = order_repository
        self._item_repo = item_repository
        self._pricing = price_aggregator or PriceAggregator(item_repository)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def add_item(
        self, order_id: str, dto: OrderItemDataDTO, *, caller: CallerIdentity
    ) -> OrderItem:
        """Attach a new item to an order and refresh the order price.

        Raises:
            OrderNotFound: order does not exist or was deleted.
            InvalidInput: the order total would exceed ``MAX_TOTAL_PRICE``.
        """
        order = self._order_repo.get_for_update(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")

        item = OrderItem(
            **dto.to_fields(),
            order_id=order.id,
            item_update_date=timezone.localdate(),
        )
        self._item_repo.save(item)
        self._sync_order(order)

        logger.info(
            "order_item.added",
            item_id=str(item.id),
            order_id=str(order.id),
            order_price=str(order.order_price),
            actor=caller.username,
        )
        return item

    @transaction.atomic
    def update_item(
        self, item_id: str, dto: OrderItemDataDTO, *, caller: CallerIdentity
    ) -> OrderItem:
        """Overwrite the mutable fields of an item and refresh the order price.

        Raises:
            OrderItemNotFound: item does not exist or was deleted.
            InvalidInput: the order total would exceed ``MAX_TOTAL_PRICE``.
        """
        order, item = self._lock_item(item_id)

        for name, value in dto.to_fields().items():
            setattr(item, name, value)
        item.item_update_date = timezone.localdate()
        self._item_repo.save(item)
        self._sync_order(order)

        logger.info(
            "order_item.updated",
            item_id=str(item.id),
            order_id=str(order.id),
            order_price=str(order.order_price),
            actor=caller.username,
        )
        return item

    @transaction.atomic
    def delete_item(self, item_id: str, *, caller: CallerIdentity) -> None:
        """Soft-delete an item and recompute the order price from scratch.

        Raises:
            OrderItemNotFound: item does not exist or was already deleted.
        """
        order, item = self._lock_item(item_id)

        self._item_repo.delete(str(item.id))
        self._sync_order(order)

        logger.info(
            "order_item.deleted",
            item_id=str(item.id),
            order_id=str(order.id),
            order_price=str(order.order_price),
            actor=caller.username,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_item(self, item_id: str, *, caller: CallerIdentity) -> OrderItem:
        """Retrieve a single live item by ID.

        Raises:
            OrderItemNotFound: if the item does not exist.
        """
        item = self._item_repo.get_by_id(item_id)
        if not item:
            raise OrderItemNotFound(f"Order item {item_id} not found.")
        return item

    def list_items(self, order_id: str, *, caller: CallerIdentity) -> List[OrderItem]:
        """Live items of an order, sorted by name (case-insensitive).

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._require_order(order_id)
        return self._item_repo.list_for_order(str(order.id))

    def search_items(
        self, order_id: str, pattern: str, *, caller: CallerIdentity
    ) -> List[OrderItem]:
        """Live items of an order whose name contains ``pattern``.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._require_order(order_id)
        pattern = (pattern or "").strip()
        if not pattern:
            return self._item_repo.list_for_order(str(order.id))
        return self._item_repo.search_for_order(str(order.id), pattern)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_order(self, order_id: str) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def _lock_item(self, item_id: str) -> tuple[Order, OrderItem]:
        """Lock the owning order, then load the item.

        The item is read again after the lock so a concurrent delete that
        committed while we waited is seen.
        """
        item = self._item_repo.get_by_id(item_id)
        if not item:
            raise OrderItemNotFound(f"Order item {item_id} not found.")

        order = self._order_repo.get_for_update(str(item.order_id))
        item = self._item_repo.get_by_id(item_id)
        if not order or not item:
            raise OrderItemNotFound(f"Order item {item_id} not found.")
        return order, item

    def _sync_order(self, order: Order) -> None:
        """Rewrite the cached price and stamp today on the locked order.

        Raises:
            InvalidInput: the new total does not fit ``order_price``; the
                surrounding transaction rolls the item change back.
        """
        total = self._pricing.compute_total(str(order.id))
        if total > MAX_TOTAL_PRICE:
            raise InvalidInput(
                {"item_count": f"Order total must not exceed {MAX_TOTAL_PRICE}."}
            )
        order.order_price = total
        order.order_update_date = timezone.localdate()
        self._order_repo.save(order)
