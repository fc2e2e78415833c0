"""Order number generation.

Order numbers look like ``ON-0123456789``: the ``ON-`` prefix followed by
ten random decimal digits.  Uniqueness is checked against every order
ever created (soft-deleted ones included); on collision a new candidate
is drawn, up to a bounded number of attempts.
"""

from __future__ import annotations

import secrets
import string
from typing import TYPE_CHECKING, Callable, Optional

import structlog
from django.conf import settings

from modules.orders.constants import (
    ORDER_NUMBER_DIGITS,
    ORDER_NUMBER_MAX_RETRIES,
    ORDER_NUMBER_PREFIX,
)
from modules.orders.exceptions import OrderNumberGenerationExhausted

if TYPE_CHECKING:
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


def random_order_number() -> str:
    """Draw one candidate: ``ON-`` + ten random digits."""
    digits = "".join(secrets.choice(string.digits) for _ in range(ORDER_NUMBER_DIGITS))
    return f"{ORDER_NUMBER_PREFIX}{digits}"


class OrderNumberGenerator:
    """Produces order numbers that no existing order uses.

    Each existence check is an independent short read; nothing is locked
    while retrying.  The database unique constraint on ``order_number``
    remains the final guard against a concurrent insert of the same value.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        max_retries: Optional[int] = None,
        candidate_factory: Callable[[], str] = random_order_number,
    ) -> None:
        if max_retries is None:
            max_retries = getattr(
                settings, "ORDER_NUMBER_MAX_RETRIES", ORDER_NUMBER_MAX_RETRIES
            )
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1.")
        self._order_repo = order_repository
        self._max_retries = max_retries
        self._candidate_factory = candidate_factory

    @property
    def max_retries(self) -> int:
        return self._max_retries

    def generate(self) -> str:
        """Return an unused order number.

        Raises:
            OrderNumberGenerationExhausted: every attempt collided.
        """
        for attempt in range(1, self._max_retries + 1):
            candidate = self._candidate_factory()
            if not self._order_repo.exists_by_order_number(candidate):
                return candidate
            logger.warning(
                "order_number.collision", attempt=attempt, candidate=candidate
            )

        logger.error("order_number.exhausted", attempts=self._max_retries)
        raise OrderNumberGenerationExhausted(
            f"Failed to generate a unique order number after "
            f"{self._max_retries} attempts."
        )
