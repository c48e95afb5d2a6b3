from typing import Optional, List

from pydantic import BaseModel, Field

from offerboard.schemas.offers import (
    Bucket,
    BucketCounts,
    DiscountResult,
    Offer,
    OfferType,
    SortDirection,
    SortKey,
    Tier,
)


class OfferRow(BaseModel):
    id: str
    name: str
    code: str
    type: OfferType
    subtitle: str                        # e.g. "Gold monthly"
    terms: str                           # "First payment" / "Repeating" / "Forever" / "Trial period"
    discount: DiscountResult
    show_original_price: bool            # False for trials
    redemption_count: int
    redemption_link: Optional[str] = None  # only when redemption_count > 0
    tier_id: str
    tier_archived: bool
    editable: bool
    edit_route: Optional[str] = None     # e.g. "offers/edit/<id>"
    copy_link: Optional[str] = None      # site url + code
    disabled_reason: Optional[str] = None


class OffersIndexRequest(BaseModel):
    offers: List[Offer] = Field(default_factory=list)
    tiers: Optional[List[Tier]] = None
    bucket: str = "active"            # decoded strictly by the classifier; unknown buckets are a 422
    sort: Optional[str] = None        # unknown keys fall back to date-added
    direction: Optional[str] = None   # defaults to desc


class OffersIndexResponse(BaseModel):
    bucket: Bucket
    title: str                        # "Active offers" / "Archived offers"
    sort: SortKey
    direction: SortDirection
    counts: BucketCounts
    count_label: Optional[str] = None     # "1 offer" / "3 offers"; None when the bucket is empty
    empty_message: Optional[str] = None   # "No offers found." when the bucket is empty
    rows: List[OfferRow]
