"""Order domain exceptions.

Raised by the Service Layer when an operation cannot complete.  Each
extends a ``modules.core.exceptions`` base and therefore carries an
``ErrorKind``; the API layer maps that kind to an HTTP status.
"""

from __future__ import annotations

from modules.core.exceptions import Conflict, GenerationExhausted, NotFound


class OrderNotFound(NotFound):
    """The requested order does not exist or has been soft-deleted."""


class OrderItemNotFound(NotFound):
    """The requested order item does not exist or has been soft-deleted."""


class OrderNumberGenerationExhausted(GenerationExhausted):
    """No free order number was found within the retry budget.

    Points at numeric-space exhaustion or a broken uniqueness check.
    """


class ConcurrentOrderModification(Conflict):
    """Reserved for optimistic-concurrency checks on orders."""
