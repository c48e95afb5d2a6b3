"""
Discount calculator.

Given an offer's discount type / amount / cadence / currency and the tier it
is attached to, derive the label, color category and the original and
discounted price strings shown next to the offer.

Pure: no I/O, no state, safe to call once per row.
"""

import logging
from typing import Any, Optional, Union

from offerboard.core.currency import format_amount, format_price, normalize_currency
from offerboard.schemas.offers import (
    Cadence,
    ColorTag,
    DiscountResult,
    Offer,
    OfferType,
    Tier,
)

logger = logging.getLogger(__name__)

Number = Union[int, float]


def _plain_number(n: Number) -> str:
    """
    20 / 20.0 => "20", 12.5 => "12.5"
    """
    if isinstance(n, float) and n.is_integer():
        return str(int(n))
    return str(n)


def base_price(cadence: Any, tier: Optional[Tier]) -> int:
    """
    Monthly price for the month cadence, yearly price otherwise.
    A missing tier or a missing price reads as 0.
    """
    if tier is None:
        return 0
    if Cadence.parse(cadence) is Cadence.MONTH:
        return tier.monthly_price or 0
    return tier.yearly_price or 0


def compute_discount(
    type: Any,
    amount: Number,
    cadence: Any,
    currency: Optional[str] = None,
    tier: Optional[Tier] = None,
    *,
    default_currency: str = "USD",
) -> DiscountResult:
    currency = normalize_currency(currency, default_currency)
    original_price = base_price(cadence, tier)
    discounted_price: float = original_price
    original_text = format_price(original_price, currency)

    offer_type = OfferType.parse(type)

    if offer_type is OfferType.PERCENT:
        color = ColorTag.POSITIVE
        label = f"{_plain_number(amount)}% off"
        discounted_price = original_price - (original_price * amount) / 100
    elif offer_type is OfferType.FIXED:
        color = ColorTag.INFORMATIONAL
        label = f"{format_amount(amount)} {currency} off"
        discounted_price = original_price - amount
    elif offer_type is OfferType.TRIAL:
        color = ColorTag.ACCENT
        label = f"{_plain_number(amount)} days free"
        # trials show no was/now comparison
        original_text = ""
    else:
        logger.debug("Unknown offer type %r, no discount applied", type)
        color = ColorTag.NONE
        label = ""

    if discounted_price < 0:
        discounted_price = 0

    return DiscountResult(
        label=label,
        color_tag=color,
        original_price=original_price,
        discounted_price=discounted_price,
        original_price_text=original_text,
        discounted_price_text=format_price(discounted_price, currency),
    )


def discount_for_offer(offer: Offer, tier: Optional[Tier], *, default_currency: str = "USD") -> DiscountResult:
    return compute_discount(
        offer.type,
        offer.amount,
        offer.cadence,
        offer.currency,
        tier,
        default_currency=default_currency,
    )
