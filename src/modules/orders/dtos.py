"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF views) and the
Service layer.  DTOs are immutable (``frozen=True``) and ignore unknown
keys, so client-supplied ``total_price`` / ``order_price`` /
``order_number`` values never reach the services.

- ``OrderDataDTO``: descriptive fields of an order (create and update).
- ``OrderItemDataDTO``: mutable fields of a line item (add and update).
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.networks import validate_email

from modules.orders.constants import (
    CLIENT_EMAIL_MAX_LENGTH,
    CLIENT_NAME_MAX_LENGTH,
    CLIENT_PHONE_MAX_LENGTH,
    COMMENTS_MAX_LENGTH,
    DEFAULT_ORDER_STATUS,
    ITEM_COUNT_MAX,
    ITEM_TEXT_MAX_LENGTH,
    LINK_TO_IMG_MAX_LENGTH,
    MAX_TOTAL_PRICE,
    ORDER_NAME_MAX_LENGTH,
    ORDER_STATUS_MAX_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
)

_DTO_CONFIG = ConfigDict(frozen=True, str_strip_whitespace=True, extra="ignore")


class OrderDataDTO(BaseModel):
    """Immutable DTO for order create / update requests.

    Validates:
    - ``order_name`` and ``client_name`` are non-blank, at most 50 chars.
    - ``client_email`` is empty or a well-formed address.
    - ``order_term`` is an ISO date.
    """

    model_config = _DTO_CONFIG

    order_name: str = Field(min_length=1, max_length=ORDER_NAME_MAX_LENGTH)
    client_name: str = Field(min_length=1, max_length=CLIENT_NAME_MAX_LENGTH)
    client_phone_number: str = Field(default="", max_length=CLIENT_PHONE_MAX_LENGTH)
    client_email: str = Field(default="", max_length=CLIENT_EMAIL_MAX_LENGTH)
    order_term: date
    order_status: str = Field(
        default=DEFAULT_ORDER_STATUS, min_length=1, max_length=ORDER_STATUS_MAX_LENGTH
    )
    comments: str = Field(default="", max_length=COMMENTS_MAX_LENGTH)

    @field_validator("client_email", mode="before")
    @classmethod
    def none_means_no_email(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("client_email")
    @classmethod
    def email_is_well_formed(cls, v: str) -> str:
        if not v:
            return v
        return validate_email(v)[1]

    def to_fields(self) -> Dict[str, Any]:
        """Model field values, ready for ``setattr`` on an ``Order``."""
        return self.model_dump()


class OrderItemDataDTO(BaseModel):
    """Immutable DTO for order item add / update requests.

    ``item_count`` and ``item_price`` are required and non-negative; the
    line total is always derived from them server side and must fit the
    ``total_price`` column.
    """

    model_config = _DTO_CONFIG

    item_name: str = Field(min_length=1, max_length=ITEM_TEXT_MAX_LENGTH)
    item_code: str = Field(default="", max_length=ITEM_TEXT_MAX_LENGTH)
    item_revision: str = Field(default="", max_length=ITEM_TEXT_MAX_LENGTH)
    item_count: int = Field(ge=0, le=ITEM_COUNT_MAX)
    item_price: Decimal = Field(
        ge=0, max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES
    )
    link_to_img: str = Field(default="", max_length=LINK_TO_IMG_MAX_LENGTH)

    @field_validator("link_to_img", mode="before")
    @classmethod
    def none_means_no_image(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("item_price")
    @classmethod
    def line_total_fits_column(cls, v: Decimal, info: ValidationInfo) -> Decimal:
        count = info.data.get("item_count")
        if count is not None and count * v > MAX_TOTAL_PRICE:
            raise ValueError(
                f"item_count * item_price must not exceed {MAX_TOTAL_PRICE}."
            )
        return v

    def to_fields(self) -> Dict[str, Any]:
        """Model field values, ready for ``setattr`` on an ``OrderItem``."""
        return self.model_dump()
