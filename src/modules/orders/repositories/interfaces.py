"""Order and OrderItem repository interfaces.

Extend ``IRepository`` with the queries the consistency engine needs:
row locking for price recomputation, order-number existence checks,
multi-field search, and item look-ups keyed by the owning order.

The Service Layer depends exclusively on these contracts (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderItem


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve a live order and lock its row until the transaction ends."""

    @abstractmethod
    def search(self, term: str) -> List[Order]:
        """Live orders where ``term`` matches any searchable field."""

    @abstractmethod
    def exists_by_order_number(self, order_number: str) -> bool:
        """``True`` if any order, deleted or not, uses ``order_number``."""


class IOrderItemRepository(IRepository["OrderItem"]):
    """Repository contract for order line items."""

    @abstractmethod
    def list_for_order(self, order_id: str) -> List[OrderItem]:
        """Live items of an order, sorted case-insensitively by name."""

    @abstractmethod
    def search_for_order(self, order_id: str, pattern: str) -> List[OrderItem]:
        """Live items of an order whose name contains ``pattern``."""

    @abstractmethod
    def delete_for_order(self, order_id: str) -> int:
        """Soft-delete every live item of an order; returns the count."""
