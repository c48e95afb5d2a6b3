from datetime import datetime
from enum import Enum
from typing import Any, Optional, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from offerboard.core.errors import UnknownVariantError


class _Variant(str, Enum):
    """
    Closed set of string values. parse() never raises unless strict=True,
    so engine code can take a defensive default for unknown input.
    """

    @classmethod
    def parse(cls, value: Any, strict: bool = False):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            if strict:
                raise UnknownVariantError(cls.__name__, value, [m.value for m in cls])
            return None


class OfferType(_Variant):
    PERCENT = "percent"
    FIXED = "fixed"
    TRIAL = "trial"


class Cadence(_Variant):
    MONTH = "month"
    YEAR = "year"


class Duration(_Variant):
    ONCE = "once"
    REPEATING = "repeating"
    FOREVER = "forever"


class OfferStatus(_Variant):
    ACTIVE = "active"
    ARCHIVED = "archived"


class Bucket(_Variant):
    ACTIVE = "active"
    ARCHIVED = "archived"


class SortKey(_Variant):
    DATE_ADDED = "date-added"
    NAME = "name"
    REDEMPTIONS = "redemptions"


class SortDirection(_Variant):
    ASC = "asc"
    DESC = "desc"


class ColorTag(_Variant):
    POSITIVE = "positive"            # green
    INFORMATIONAL = "informational"  # blue
    ACCENT = "accent"                # pink
    NONE = "none"


class Tier(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: Optional[str] = None
    monthly_price: Optional[int] = Field(default=None, ge=0)  # minor units
    yearly_price: Optional[int] = Field(default=None, ge=0)   # minor units
    active: bool


class Offer(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    code: str = ""
    type: OfferType
    amount: Union[int, float]  # percent 0-100, fixed minor units, trial days
    cadence: Cadence
    duration: Duration = Duration.ONCE
    currency: str = "USD"
    status: OfferStatus
    redemption_count: int = Field(default=0, ge=0)
    created_at: Optional[datetime] = None
    tier_id: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _tier_ref(cls, data: Any) -> Any:
        """
        The offers store nests the tier reference: {"tier": {"id": "..."}}.
        Accept that shape as well as a flat tier_id.
        """
        if isinstance(data, dict) and not data.get("tier_id"):
            tier = data.get("tier")
            if isinstance(tier, dict) and tier.get("id"):
                data = {**data, "tier_id": tier["id"]}
        return data

    @field_validator("currency", mode="before")
    @classmethod
    def _currency(cls, v: Any) -> str:
        if not v:
            return "USD"
        return str(v).strip().upper()


class DiscountResult(BaseModel):
    label: str
    color_tag: ColorTag
    original_price: int                 # minor units
    discounted_price: float             # minor units, never negative
    original_price_text: str            # "" for trials
    discounted_price_text: str


class DiscountRequest(BaseModel):
    type: str  # kept as free text: unknown types get an empty label, not a 422
    amount: Union[int, float]
    cadence: Cadence
    currency: Optional[str] = None
    tier: Optional[Tier] = None


class BucketCounts(BaseModel):
    active: int = 0
    archived: int = 0


class ClassifiedOffer(BaseModel):
    offer: Offer
    tier: Tier  # always resolved; offers with a dangling tier are never classified


class ClassifiedOffers(BaseModel):
    bucket: Bucket
    sort_key: SortKey
    sort_direction: SortDirection
    entries: List[ClassifiedOffer]
    counts: BucketCounts

    @property
    def offers(self) -> List[Offer]:
        return [e.offer for e in self.entries]


class RedemptionLinkResponse(BaseModel):
    offer_id: str
    url: str
