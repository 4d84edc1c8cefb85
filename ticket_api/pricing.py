"""
Cart parsing and PayPal order payload construction.

The storefront posts its cart as four positional entries:

    [{"premiumQuantity": 2}, {"standardQuantity": 0},
     {"studentQuantity": 1}, {"totalPrice": "155.00"}]

Line items are priced from TICKET_TIERS; the grand total is taken from the
cart as given and forwarded verbatim.
"""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List

from ticket_api.errors import InvalidCartError

logger = logging.getLogger(__name__)

CURRENCY = "USD"
INTENT = "CAPTURE"
EVENT_DESCRIPTION = "First Presbyterian Church of Greenlawn Craig Schulman on Broadway"


@dataclass(frozen=True)
class TicketTier:
    key: str
    name: str
    unit_price: str


# Cart positions 0..2 follow this order.
TICKET_TIERS = (
    TicketTier("premiumQuantity", "Premium tickets", "65.00"),
    TicketTier("standardQuantity", "Standard tickets", "40.00"),
    TicketTier("studentQuantity", "Student tickets", "25.00"),
)
TOTAL_KEY = "totalPrice"

# ASCII only: str.isdigit() and Decimal() both accept other Unicode digits.
QUANTITY_RE = re.compile(r"[0-9]+")
AMOUNT_RE = re.compile(r"[0-9]+(\.[0-9]{1,2})?")


@dataclass(frozen=True)
class Cart:
    premium_quantity: int
    standard_quantity: int
    student_quantity: int
    total_price: str

    @property
    def quantities(self) -> List[int]:
        return [self.premium_quantity, self.standard_quantity, self.student_quantity]


def _entry(raw_cart, index: int, key: str) -> Any:
    entry = raw_cart[index]
    if not isinstance(entry, dict) or key not in entry:
        raise InvalidCartError(f"cart[{index}] must be an object with '{key}'")
    return entry[key]


def _parse_quantity(value, key: str) -> int:
    if isinstance(value, bool):
        raise InvalidCartError(f"'{key}' must be a non-negative integer")
    if isinstance(value, int):
        quantity = value
    elif isinstance(value, str) and QUANTITY_RE.fullmatch(value.strip()):
        quantity = int(value.strip())
    else:
        raise InvalidCartError(f"'{key}' must be a non-negative integer")
    if quantity < 0:
        raise InvalidCartError(f"'{key}' must be a non-negative integer")
    return quantity


def _parse_total(value) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise InvalidCartError(f"'{TOTAL_KEY}' must be a decimal amount")
    if isinstance(value, float):
        # repr() is the shortest round-tripping form, so 129.999 stays 129.999
        text = repr(value)
    else:
        text = str(value)
    if not AMOUNT_RE.fullmatch(text):
        raise InvalidCartError(f"'{TOTAL_KEY}' must be a decimal amount with at most two decimals")
    if isinstance(value, float):
        text = f"{Decimal(text):.2f}"
    return text


def parse_cart(raw_cart) -> Cart:
    """Validate the storefront cart and return a typed Cart."""
    if not isinstance(raw_cart, (list, tuple)) or len(raw_cart) != len(TICKET_TIERS) + 1:
        raise InvalidCartError(f"cart must be a list of {len(TICKET_TIERS) + 1} entries")

    quantities = [
        _parse_quantity(_entry(raw_cart, i, tier.key), tier.key)
        for i, tier in enumerate(TICKET_TIERS)
    ]
    total = _parse_total(_entry(raw_cart, len(TICKET_TIERS), TOTAL_KEY))
    return Cart(*quantities, total_price=total)


def build_line_items(cart: Cart) -> List[Dict[str, Any]]:
    items = []
    for tier, quantity in zip(TICKET_TIERS, cart.quantities):
        if quantity > 0:
            items.append({
                "name": tier.name,
                "unit_amount": {"currency_code": CURRENCY, "value": tier.unit_price},
                "quantity": f"{quantity}",
            })
    return items


def items_total(cart: Cart) -> Decimal:
    return sum(
        (Decimal(tier.unit_price) * quantity for tier, quantity in zip(TICKET_TIERS, cart.quantities)),
        Decimal("0"),
    )


def build_order_payload(cart: Cart) -> Dict[str, Any]:
    """
    Build the Orders v2 create body.

    amount.value and item_total.value are the cart total verbatim. A total that
    disagrees with the priced line items is logged, not corrected: PayPal
    rejects a breakdown that does not add up.
    """
    computed = items_total(cart)
    if computed != Decimal(cart.total_price):
        logger.warning(
            f"Cart total {cart.total_price} differs from line item sum {computed}"
        )

    return {
        "intent": INTENT,
        "purchase_units": [
            {
                "description": EVENT_DESCRIPTION,
                "amount": {
                    "currency_code": CURRENCY,
                    "value": cart.total_price,
                    "breakdown": {
                        "item_total": {
                            "currency_code": CURRENCY,
                            "value": cart.total_price,
                        }
                    },
                },
                "items": build_line_items(cart),
            }
        ],
    }
