"""Order DRF serializers for API output.

The serializers operate at the Interface layer (API Views) and are
read-only.  Request bodies are validated by the Pydantic DTOs in
``dtos.py`` before they reach the Service Layer.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    """Read serializer for a line item; ``total_price`` is server-derived."""

    order_id = serializers.UUIDField(read_only=True)
    is_deleted = serializers.BooleanField(read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "order_id",
            "item_name",
            "item_code",
            "item_revision",
            "item_count",
            "item_price",
            "total_price",
            "link_to_img",
            "item_update_date",
            "is_deleted",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders (items are served by ``/items/``)."""

    is_deleted = serializers.BooleanField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "order_name",
            "client_name",
            "client_phone_number",
            "client_email",
            "order_term",
            "order_status",
            "order_price",
            "comments",
            "order_update_date",
            "is_deleted",
        ]
        read_only_fields = fields
