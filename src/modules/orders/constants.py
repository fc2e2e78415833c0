"""Order domain constants.

Field limits mirror the storage schema; the DTOs and the models both read
them so validation and columns never drift apart.
"""

from decimal import Decimal

# ---------------------------------------------------------------------------
# Order number: "ON-" + 10 decimal digits
# ---------------------------------------------------------------------------
ORDER_NUMBER_PREFIX = "ON-"
ORDER_NUMBER_DIGITS = 10
ORDER_NUMBER_LENGTH = len(ORDER_NUMBER_PREFIX) + ORDER_NUMBER_DIGITS
ORDER_NUMBER_MAX_RETRIES = 1000

# ---------------------------------------------------------------------------
# Field limits
# ---------------------------------------------------------------------------
ORDER_NAME_MAX_LENGTH = 50
CLIENT_NAME_MAX_LENGTH = 50
CLIENT_PHONE_MAX_LENGTH = 20
CLIENT_EMAIL_MAX_LENGTH = 50
ORDER_STATUS_MAX_LENGTH = 50
COMMENTS_MAX_LENGTH = 200

ITEM_TEXT_MAX_LENGTH = 50
LINK_TO_IMG_MAX_LENGTH = 255

PRICE_MAX_DIGITS = 10
TOTAL_MAX_DIGITS = 12
PRICE_DECIMAL_PLACES = 2

# Largest value a TOTAL_MAX_DIGITS column holds: 9999999999.99
MAX_TOTAL_PRICE = Decimal(10) ** (TOTAL_MAX_DIGITS - PRICE_DECIMAL_PLACES) - Decimal("0.01")

# PositiveIntegerField range shared by every supported backend
ITEM_COUNT_MAX = 2_147_483_647

DEFAULT_ORDER_STATUS = "Pending"
ZERO_PRICE = Decimal("0.00")

# ---------------------------------------------------------------------------
# Query behaviour
# ---------------------------------------------------------------------------
ORDER_SORT = ["-order_update_date", "order_term", "client_name", "order_name"]

ORDER_SEARCH_FIELDS = (
    "order_number",
    "order_name",
    "client_name",
    "client_phone_number",
    "client_email",
)
