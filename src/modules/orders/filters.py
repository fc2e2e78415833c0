from functools import reduce
from operator import or_

import django_filters
from django.db.models import Q

from modules.orders.constants import ORDER_SEARCH_FIELDS
from modules.orders.models import Order, OrderItem


class OrderSearchFilter(django_filters.FilterSet):
    """Free-text order search.

    ``q`` is matched case-insensitively as a substring against every field
    in ``ORDER_SEARCH_FIELDS``; a match on any one of them is enough.
    """

    q = django_filters.CharFilter(method="filter_any_field")

    class Meta:
        model = Order
        fields: list[str] = []

    def filter_any_field(self, queryset, name, value):
        condition = reduce(
            or_, (Q(**{f"{field}__icontains": value}) for field in ORDER_SEARCH_FIELDS)
        )
        return queryset.filter(condition)


class OrderItemSearchFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="item_name", lookup_expr="icontains")

    class Meta:
        model = OrderItem
        fields: list[str] = []
