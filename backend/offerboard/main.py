"""
Offers Index API - FastAPI Main Entry

Pricing + classification for the offers list. Stateless: callers post the
offers/tiers snapshot they hold, nothing is stored here.

✅ LOCAL:
    cd backend
    python -m uvicorn offerboard.main:app --reload --host 0.0.0.0 --port 8000

✅ TEST:
    curl -i http://127.0.0.1:8000/health
    curl -i http://127.0.0.1:8000/v1/offers/abc123/redemptions-link
    curl -i -X POST http://127.0.0.1:8000/v1/offers/index \
        -H 'Content-Type: application/json' \
        -d '{"offers": [], "tiers": [], "bucket": "active"}'
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from offerboard.core.config import settings

# ✅ Routers
from offerboard.api.routes_meta import router as meta_router
from offerboard.api.routes_offers import router as offers_router


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Offers Index API",
        version=settings.APP_VERSION,
        description="Discount pricing and active/archived classification for subscription offers",
    )

    # ✅ CORS
    # Admin UI is served from another origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ✅ Mount routers
    app.include_router(meta_router)
    app.include_router(offers_router)

    return app


app = create_app()
