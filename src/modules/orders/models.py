"""Order and OrderItem models.

Rules implemented here:
- ``order_number`` is unique at the storage layer, as a backstop to the
  application-level check in ``numbering.OrderNumberGenerator``.
- ``order_price`` is a cached aggregate; only the service layer writes it
  (see ``pricing.PriceAggregator``).
- OrderItem ``total_price`` is always ``item_count * item_price``,
  recalculated on save and never taken from client input.
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import SoftDeleteModel
from modules.orders.constants import (
    CLIENT_EMAIL_MAX_LENGTH,
    CLIENT_NAME_MAX_LENGTH,
    CLIENT_PHONE_MAX_LENGTH,
    COMMENTS_MAX_LENGTH,
    DEFAULT_ORDER_STATUS,
    ITEM_TEXT_MAX_LENGTH,
    LINK_TO_IMG_MAX_LENGTH,
    ORDER_NAME_MAX_LENGTH,
    ORDER_NUMBER_LENGTH,
    ORDER_SORT,
    ORDER_STATUS_MAX_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
    TOTAL_MAX_DIGITS,
)


class Order(SoftDeleteModel):
    """Order aggregate root.

    ``order_number`` is a human-readable identifier (``ON-XXXXXXXXXX``)
    assigned once at creation.  The UUIDv7 ``id`` is used for all internal
    references and API look-ups.
    """

    order_number: models.CharField = models.CharField(
        max_length=ORDER_NUMBER_LENGTH, unique=True, editable=False
    )
    order_name: models.CharField = models.CharField(max_length=ORDER_NAME_MAX_LENGTH)
    client_name: models.CharField = models.CharField(max_length=CLIENT_NAME_MAX_LENGTH)
    client_phone_number: models.CharField = models.CharField(
        max_length=CLIENT_PHONE_MAX_LENGTH, blank=True, default=""
    )
    client_email: models.EmailField = models.EmailField(
        max_length=CLIENT_EMAIL_MAX_LENGTH, blank=True, default=""
    )
    order_term: models.DateField = models.DateField()
    order_status: models.CharField = models.CharField(
        max_length=ORDER_STATUS_MAX_LENGTH, default=DEFAULT_ORDER_STATUS
    )
    order_price: models.DecimalField = models.DecimalField(
        max_digits=TOTAL_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        default=Decimal("0.00"),
    )
    comments: models.CharField = models.CharField(
        max_length=COMMENTS_MAX_LENGTH, blank=True, default=""
    )
    order_update_date: models.DateField = models.DateField()

    class Meta:
        db_table = "orders"
        ordering = ORDER_SORT
        indexes = [
            models.Index(
                fields=["-order_update_date", "order_term"],
                name="orders_update_term_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order_number} ({self.order_name})"


class OrderItem(SoftDeleteModel):
    """Line item owned by exactly one Order.

    The owner is referenced by ``order_id`` only; services load items with
    an explicit query on that key instead of walking ``order.items``.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    item_name: models.CharField = models.CharField(max_length=ITEM_TEXT_MAX_LENGTH)
    item_code: models.CharField = models.CharField(
        max_length=ITEM_TEXT_MAX_LENGTH, blank=True, default=""
    )
    item_revision: models.CharField = models.CharField(
        max_length=ITEM_TEXT_MAX_LENGTH, blank=True, default=""
    )
    item_count: models.PositiveIntegerField = models.PositiveIntegerField(default=0)
    item_price: models.DecimalField = models.DecimalField(
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    total_price: models.DecimalField = models.DecimalField(
        max_digits=TOTAL_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        default=Decimal("0.00"),
        editable=False,
    )
    link_to_img: models.CharField = models.CharField(
        max_length=LINK_TO_IMG_MAX_LENGTH, blank=True, default=""
    )
    item_update_date: models.DateField = models.DateField()

    class Meta:
        db_table = "order_items"
        ordering = ["item_name"]
        indexes = [
            models.Index(fields=["order", "deleted_at"], name="order_items_alive_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(item_price__gte=0),
                name="order_items_price_non_negative",
            ),
        ]

    def calculate_total(self) -> Decimal:
        return Decimal(self.item_count) * Decimal(self.item_price)

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.total_price = self.calculate_total()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "total_price" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["total_price"]
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.item_name} x{self.item_count} ({self.total_price})"
