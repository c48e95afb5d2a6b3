import logging

from fastapi import APIRouter, Depends, HTTPException

from offerboard.core.classify import redemption_filter_link
from offerboard.core.config import settings
from offerboard.core.discount import compute_discount
from offerboard.core.errors import OffersError, UnknownVariantError
from offerboard.core.listing import build_index
from offerboard.schemas.listing import OffersIndexRequest, OffersIndexResponse
from offerboard.schemas.offers import DiscountRequest, DiscountResult, RedemptionLinkResponse

logger = logging.getLogger(__name__)


def require_offers_enabled() -> None:
    """
    Feature gate: with OFFERS_ENABLED=false the offers surface doesn't exist.
    """
    if not settings.OFFERS_ENABLED:
        raise HTTPException(
            status_code=404,
            detail={"error": "offers_disabled", "message": "Offers are not enabled on this site"},
        )


router = APIRouter(prefix="/v1", tags=["offers"], dependencies=[Depends(require_offers_enabled)])


def _engine_error(e: OffersError) -> HTTPException:
    detail = {"error": "invalid_offer_input", "message": e.message}
    if isinstance(e, UnknownVariantError):
        detail["field"] = e.variant
        detail["allowed"] = e.allowed
    return HTTPException(status_code=422, detail=detail)


@router.post("/offers/discount", response_model=DiscountResult)
def discount(req: DiscountRequest):
    """
    Label + original/discounted price text for one offer against its tier.
    """
    return compute_discount(
        req.type,
        req.amount,
        req.cadence,
        req.currency,
        req.tier,
        default_currency=settings.DEFAULT_CURRENCY,
    )


@router.post("/offers/index", response_model=OffersIndexResponse)
def offers_index(req: OffersIndexRequest):
    """
    Classify the posted offers into the requested bucket, sort them, and
    return rows with computed prices, plus counts for both buckets.
    """
    try:
        result = build_index(
            req.offers,
            req.tiers,
            req.bucket,
            req.sort,
            req.direction,
            site_url=settings.SITE_URL,
            members_path=settings.MEMBERS_ADMIN_PATH,
            default_currency=settings.DEFAULT_CURRENCY,
        )
    except OffersError as e:
        raise _engine_error(e)

    logger.info(
        "offers index bucket=%s sort=%s/%s offers=%d rows=%d",
        result.bucket.value,
        result.sort.value,
        result.direction.value,
        len(req.offers),
        len(result.rows),
    )
    return result


@router.get("/offers/{offer_id}/redemptions-link", response_model=RedemptionLinkResponse)
def redemptions_link(offer_id: str):
    return RedemptionLinkResponse(
        offer_id=offer_id,
        url=redemption_filter_link(offer_id, settings.MEMBERS_ADMIN_PATH),
    )
