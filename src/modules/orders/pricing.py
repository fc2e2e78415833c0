"""Order price aggregation."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from modules.orders.constants import ZERO_PRICE

if TYPE_CHECKING:
    from modules.orders.repositories.interfaces import IOrderItemRepository


class PriceAggregator:
    """Computes an order's total from its live line items.

    Each line contributes ``item_count * item_price``; the stored
    ``total_price`` column is not trusted here.  Soft-deleted items are
    excluded by the repository.
    """

    def __init__(self, item_repository: IOrderItemRepository) -> None:
        self._item_repo = item_repository

    def compute_total(self, order_id: str) -> Decimal:
        items = self._item_repo.list_for_order(order_id)
        return sum((item.calculate_total() for item in items), ZERO_PRICE)
