"""
Offers index view data.

Runs the classifier, then the discount calculator per visible offer, and
returns everything the list screen shows: rows, bucket counts, header text.
"""

import logging
from typing import Any, Iterable, Optional

from offerboard.core.classify import (
    MEMBERS_ADMIN_PATH,
    cadence_label,
    classify_and_sort,
    duration_label,
    redemption_filter_link,
)
from offerboard.core.discount import discount_for_offer
from offerboard.schemas.listing import OfferRow, OffersIndexResponse
from offerboard.schemas.offers import Bucket, Offer, OfferType, Tier

logger = logging.getLogger(__name__)

BUCKET_TITLES = {
    Bucket.ACTIVE: "Active",
    Bucket.ARCHIVED: "Archived",
}

EMPTY_MESSAGE = "No offers found."
TIER_ARCHIVED_REASON = "This offer is disabled, because it is tied to an archived tier."


def offer_link(site_url: str, code: str) -> str:
    """
    Shareable offer URL: homepage + code.
      ("https://example.com", "black-friday") => "https://example.com/black-friday"
    """
    base = site_url if site_url.endswith("/") else f"{site_url}/"
    return f"{base}{code}"


def count_label(n: int) -> str:
    return f"{n} {'offer' if n == 1 else 'offers'}"


def build_row(
    offer: Offer,
    tier: Tier,
    *,
    site_url: str,
    members_path: str = MEMBERS_ADMIN_PATH,
    default_currency: str = "USD",
) -> OfferRow:
    tier_archived = tier.active is False
    discount = discount_for_offer(offer, tier, default_currency=default_currency)
    is_trial = offer.type is OfferType.TRIAL

    subtitle = f"{tier.name or ''} {cadence_label(offer.cadence)}".strip()

    return OfferRow(
        id=offer.id,
        name=offer.name,
        code=offer.code,
        type=offer.type,
        subtitle=subtitle,
        terms="Trial period" if is_trial else duration_label(offer.duration),
        discount=discount,
        show_original_price=not is_trial,
        redemption_count=offer.redemption_count,
        redemption_link=(
            redemption_filter_link(offer.id, members_path) if offer.redemption_count > 0 else None
        ),
        tier_id=tier.id,
        tier_archived=tier_archived,
        editable=not tier_archived,
        edit_route=None if tier_archived else f"offers/edit/{offer.id}",
        copy_link=None if tier_archived else offer_link(site_url, offer.code),
        disabled_reason=TIER_ARCHIVED_REASON if tier_archived else None,
    )


def build_index(
    offers: Iterable[Offer],
    tiers: Optional[Iterable[Tier]],
    bucket: Any = Bucket.ACTIVE,
    sort_key: Any = None,
    sort_direction: Any = None,
    *,
    site_url: str,
    members_path: str = MEMBERS_ADMIN_PATH,
    default_currency: str = "USD",
) -> OffersIndexResponse:
    classified = classify_and_sort(offers, tiers, bucket, sort_key, sort_direction)

    rows = []
    for entry in classified.entries:
        rows.append(
            build_row(
                entry.offer,
                entry.tier,
                site_url=site_url,
                members_path=members_path,
                default_currency=default_currency,
            )
        )

    if classified.bucket is Bucket.ACTIVE:
        total = classified.counts.active
    else:
        total = classified.counts.archived

    logger.debug(
        "Built %s offers index: %d rows (%d counted)", classified.bucket.value, len(rows), total
    )

    return OffersIndexResponse(
        bucket=classified.bucket,
        title=f"{BUCKET_TITLES[classified.bucket]} offers",
        sort=classified.sort_key,
        direction=classified.sort_direction,
        counts=classified.counts,
        count_label=count_label(total) if total > 0 else None,
        empty_message=EMPTY_MESSAGE if total == 0 else None,
        rows=rows,
    )
