"""Order API views.

Exposes ``OrderService`` and ``OrderItemService`` via HTTP using DRF
ViewSets.  Domain exceptions are not caught here: the project-wide
exception handler (``modules.core.exceptions.api_exception_handler``)
maps each ``ErrorKind`` to its HTTP status.
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.identity import CallerIdentity, OrderAccessPolicy
from modules.core.validation import parse_dto
from modules.orders.dtos import OrderDataDTO, OrderItemDataDTO
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    OrderItemDjangoRepository,
)
from modules.orders.serializers import OrderItemSerializer, OrderSerializer
from modules.orders.services import OrderItemService, OrderService

SEARCH_PARAMETER = OpenApiParameter(
    name="search",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.QUERY,
    required=False,
    description="Case-insensitive substring filter.",
)


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` / ``OrderItemService`` with injected
    repositories (DIP).  Does **not** extend ``ModelViewSet``: all ORM
    access goes through the service/repository layer.
    """

    queryset = Order.objects.alive()
    serializer_class = OrderSerializer
    permission_classes = [OrderAccessPolicy]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        order_repository = OrderDjangoRepository()
        item_repository = OrderItemDjangoRepository()
        self._service = OrderService(
            order_repository=order_repository,
            item_repository=item_repository,
        )
        self._item_service = OrderItemService(
            order_repository=order_repository,
            item_repository=item_repository,
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    @extend_schema(parameters=[SEARCH_PARAMETER])
    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/?search=..."""
        caller = CallerIdentity.from_user(request.user)
        term = request.query_params.get("search")
        if term is None:
            orders = self._service.list_orders(caller=caller)
        else:
            orders = self._service.search_orders(term, caller=caller)
        return Response(OrderSerializer(orders, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        caller = CallerIdentity.from_user(request.user)
        order = self._service.get_order(pk, caller=caller)
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    @extend_schema(request=OrderDataDTO, responses=OrderSerializer)
    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        dto = parse_dto(OrderDataDTO, request.data)
        order = self._service.create_order(
            dto, caller=CallerIdentity.from_user(request.user)
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=OrderDataDTO, responses=OrderSerializer)
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/orders/{pk}/"""
        dto = parse_dto(OrderDataDTO, request.data)
        order = self._service.update_order(
            pk, dto, caller=CallerIdentity.from_user(request.user)
        )
        return Response(OrderSerializer(order).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/ (soft-deletes the order and its items)"""
        self._service.delete_order(pk, caller=CallerIdentity.from_user(request.user))
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Items of one order
    # ------------------------------------------------------------------

    @extend_schema(
        methods=["GET"],
        parameters=[SEARCH_PARAMETER],
        responses=OrderItemSerializer(many=True),
    )
    @extend_schema(
        methods=["POST"],
        request=OrderItemDataDTO,
        responses=OrderItemSerializer,
    )
    @action(detail=True, methods=["get", "post"], url_path="items")
    def items(self, request: Request, pk: str | None = None) -> Response:
        """GET / POST /api/v1/orders/{pk}/items/"""
        caller = CallerIdentity.from_user(request.user)

        if request.method == "POST":
            dto = parse_dto(OrderItemDataDTO, request.data)
            item = self._item_service.add_item(pk, dto, caller=caller)
            return Response(
                OrderItemSerializer(item).data, status=status.HTTP_201_CREATED
            )

        pattern = request.query_params.get("search")
        if pattern is None:
            items = self._item_service.list_items(pk, caller=caller)
        else:
            items = self._item_service.search_items(pk, pattern, caller=caller)
        return Response(OrderItemSerializer(items, many=True).data)


class OrderItemViewSet(GenericViewSet):
    """ViewSet for single order items (retrieve / update / destroy)."""

    queryset = OrderItem.objects.alive()
    serializer_class = OrderItemSerializer
    permission_classes = [OrderAccessPolicy]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderItemService(
            order_repository=OrderDjangoRepository(),
            item_repository=OrderItemDjangoRepository(),
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/order-items/{pk}/"""
        item = self._service.get_item(pk, caller=CallerIdentity.from_user(request.user))
        return Response(OrderItemSerializer(item).data)

    @extend_schema(request=OrderItemDataDTO, responses=OrderItemSerializer)
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/order-items/{pk}/"""
        dto = parse_dto(OrderItemDataDTO, request.data)
        item = self._service.update_item(
            pk, dto, caller=CallerIdentity.from_user(request.user)
        )
        return Response(OrderItemSerializer(item).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/order-items/{pk}/"""
        self._service.delete_item(pk, caller=CallerIdentity.from_user(request.user))
        return Response(status=status.HTTP_204_NO_CONTENT)
