"""
Offer classifier & sorter.

Buckets (tier looked up by offer.tier_id):
  active   = offer active AND tier found AND tier active
  archived = offer archived OR (tier found AND tier not active)

The two rules are not complements of each other and are kept literally.
An offer whose tier can't be found never renders in either bucket.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import quote

from pyuca import Collator

from offerboard.schemas.offers import (
    Bucket,
    BucketCounts,
    Cadence,
    ClassifiedOffer,
    ClassifiedOffers,
    Duration,
    Offer,
    OfferStatus,
    SortDirection,
    SortKey,
    Tier,
)

logger = logging.getLogger(__name__)

MEMBERS_ADMIN_PATH = "/ghost/#/members"


def index_tiers(tiers: Optional[Iterable[Tier]]) -> Dict[str, Tier]:
    """
    Tiers by id. With duplicate ids the first tier wins, like a linear find.
    """
    by_id: Dict[str, Tier] = {}
    for t in tiers or []:
        by_id.setdefault(t.id, t)
    return by_id


def resolve_tier(offer: Offer, tiers_by_id: Dict[str, Tier]) -> Optional[Tier]:
    if not offer.tier_id:
        return None
    return tiers_by_id.get(offer.tier_id)


def is_active(offer: Offer, tier: Optional[Tier]) -> bool:
    return offer.status is OfferStatus.ACTIVE and tier is not None and tier.active is True


def is_archived(offer: Offer, tier: Optional[Tier]) -> bool:
    return offer.status is OfferStatus.ARCHIVED or (tier is not None and tier.active is False)


def in_bucket(offer: Offer, tier: Optional[Tier], bucket: Bucket) -> bool:
    if bucket is Bucket.ACTIVE:
        return is_active(offer, tier)
    return is_archived(offer, tier)


def count_buckets(offers: Iterable[Offer], tiers_by_id: Dict[str, Tier]) -> BucketCounts:
    """
    Counts follow the bucket rules as-is, so an archived offer with a dangling
    tier is counted in "archived" even though it never renders.
    """
    active = archived = 0
    for offer in offers:
        tier = resolve_tier(offer, tiers_by_id)
        if is_active(offer, tier):
            active += 1
        if is_archived(offer, tier):
            archived += 1
    return BucketCounts(active=active, archived=archived)


# -------------------------
# Sorting
# -------------------------

def _timestamp(value: Optional[datetime]) -> float:
    if value is None:
        return 0.0
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


_collator: Optional[Collator] = None


def _name_key(name: str) -> Tuple[int, ...]:
    """
    Unicode collation (DUCET): symbols before letters, then base letters,
    accents, and lowercase before uppercase.
    """
    global _collator
    if _collator is None:
        # loads the collation table, so only once
        _collator = Collator()
    return _collator.sort_key(name)


def resolve_sort(sort_key: Any = None, direction: Any = None) -> Tuple[SortKey, SortDirection]:
    """
    Unknown / missing key => date-added.
    Missing direction => desc; anything other than "desc" sorts ascending.
    """
    key = SortKey.parse(sort_key) if sort_key is not None else SortKey.DATE_ADDED
    if key is None:
        logger.debug("Unknown sort key %r, falling back to date-added", sort_key)
        key = SortKey.DATE_ADDED

    if direction is None:
        return key, SortDirection.DESC
    if SortDirection.parse(direction) is SortDirection.DESC:
        return key, SortDirection.DESC
    return key, SortDirection.ASC


def sort_offers(offers: Iterable[Offer], sort_key: Any = None, direction: Any = None) -> List[Offer]:
    """
    Stable sort: offers that compare equal keep their input order in both directions.
    """
    key, dirn = resolve_sort(sort_key, direction)

    reverse = dirn is SortDirection.DESC

    if key is SortKey.NAME:
        return sorted(offers, key=lambda o: _name_key(o.name), reverse=reverse)
    if key is SortKey.REDEMPTIONS:
        return sorted(offers, key=lambda o: o.redemption_count, reverse=reverse)
    # date-added
    return sorted(offers, key=lambda o: _timestamp(o.created_at), reverse=reverse)


def classify_and_sort(
    offers: Iterable[Offer],
    tiers: Optional[Iterable[Tier]],
    bucket: Any = Bucket.ACTIVE,
    sort_key: Any = None,
    sort_direction: Any = None,
) -> ClassifiedOffers:
    """
    Sort the whole collection first, then keep the offers of the selected
    bucket whose tier resolves. Counts cover both buckets.
    """
    selected = Bucket.parse(bucket, strict=True)
    key, dirn = resolve_sort(sort_key, sort_direction)
    all_offers = list(offers)
    tiers_by_id = index_tiers(tiers)

    visible: List[ClassifiedOffer] = []
    for offer in sort_offers(all_offers, key, dirn):
        tier = resolve_tier(offer, tiers_by_id)
        if tier is None:
            logger.debug("Offer %s references unknown tier %r, skipped", offer.id, offer.tier_id)
            continue
        if in_bucket(offer, tier, selected):
            visible.append(ClassifiedOffer(offer=offer, tier=tier))

    return ClassifiedOffers(
        bucket=selected,
        sort_key=key,
        sort_direction=dirn,
        entries=visible,
        counts=count_buckets(all_offers, tiers_by_id),
    )


# -------------------------
# Labels & links
# -------------------------

def cadence_label(cadence: Any) -> str:
    return "monthly" if Cadence.parse(cadence) is Cadence.MONTH else "yearly"


def duration_label(duration: Any) -> str:
    d = Duration.parse(duration)
    if d is Duration.ONCE:
        return "First payment"
    if d is Duration.REPEATING:
        return "Repeating"
    return "Forever"


def redemption_filter_link(offer_id: str, base_path: str = MEMBERS_ADMIN_PATH) -> str:
    """
    Members list filtered to the offer's redemptions:
      "abc123" => "/ghost/#/members?filter=offer_redemptions%3A%5Babc123%5D"
    """
    filter_value = f"offer_redemptions:[{offer_id}]"
    # same unreserved set as encodeURIComponent
    encoded = quote(filter_value, safe="-_.!~*'()")
    return f"{base_path}?filter={encoded}"
