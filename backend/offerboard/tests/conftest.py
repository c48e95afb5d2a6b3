"""
Shared fixtures for the offers engine tests.
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from offerboard.core.config import settings
from offerboard.main import app
from offerboard.schemas.offers import Offer, Tier


def make_offer(offer_id: str, **overrides) -> Offer:
    """Helper to create an offer with sensible defaults."""
    data = {
        "id": offer_id,
        "name": f"Offer {offer_id}",
        "code": f"code-{offer_id}",
        "type": "percent",
        "amount": 20,
        "cadence": "month",
        "duration": "once",
        "currency": "USD",
        "status": "active",
        "redemption_count": 0,
        "created_at": None,
        "tier_id": "gold",
    }
    data.update(overrides)
    return Offer(**data)


def make_tier(tier_id: str = "gold", **overrides) -> Tier:
    """Helper to create a tier (defaults: $20/month, $200/year, active)."""
    data = {
        "id": tier_id,
        "name": tier_id.capitalize(),
        "monthly_price": 2000,
        "yearly_price": 20000,
        "active": True,
    }
    data.update(overrides)
    return Tier(**data)


def at(day: int) -> datetime:
    return datetime(2024, 1, day, tzinfo=timezone.utc)


@pytest.fixture
def gold_tier():
    return make_tier("gold")


@pytest.fixture
def archived_tier():
    return make_tier("legacy", active=False)


@pytest.fixture
def client():
    """Get FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def offers_disabled(monkeypatch):
    monkeypatch.setattr(settings, "OFFERS_ENABLED", False)
