# ================================
# TEST FIXTURES (tests/conftest.py)
# ================================

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from app.schemas.catalogue import (
    AddonOption,
    BillingPeriod,
    Catalogue,
    RentalUnitOption,
    UnitCategory,
)
from app.schemas.pricing import Selection, Zusatzleistungen


@pytest.fixture
def catalogue():
    """Small catalogue mirroring the store's Mietfächer plus test-only add-ons"""
    return Catalogue(
        units=(
            RentalUnitOption(id="block-a", name="Verkaufsblock Lage A", monthly_price=Decimal("35")),
            RentalUnitOption(id="block-b", name="Verkaufsblock Lage B", monthly_price=Decimal("15")),
            RentalUnitOption(
                id="block-cold",
                name="Verkaufsblock gekühlt",
                monthly_price=Decimal("50"),
                category=UnitCategory.COOLED
            ),
            RentalUnitOption(id="block-other", name="Flexibler Bereich", monthly_price=None),
        ),
        addons=(
            AddonOption(id="window-small", name="Schaufenster klein", monthly_price=Decimal("30")),
            AddonOption(
                id="social-post",
                name="Social-Media-Post",
                monthly_price=Decimal("7.50"),
                billing_period=BillingPeriod.WEEKLY
            ),
            AddonOption(
                id="newsletter",
                name="Newsletter-Platzierung",
                monthly_price=Decimal("12"),
                requires_premium_provision=True
            ),
        )
    )


@pytest.fixture
def make_selection():
    """Factory for selections with sensible defaults"""
    def _make(
        unit_counts=None,
        addon_ids=None,
        lagerservice=False,
        versandservice=False,
        duration=3,
        provision="basic"
    ) -> Selection:
        return Selection(
            selected_provision_type=provision,
            unit_counts=unit_counts or {},
            selected_addon_ids=set(addon_ids or ()),
            zusatzleistungen=Zusatzleistungen(lagerservice=lagerservice, versandservice=versandservice),
            rental_duration_months=duration
        )
    return _make


@pytest.fixture
def now():
    return datetime(2025, 9, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def client(catalogue):
    """API client using the test catalogue"""
    from fastapi.testclient import TestClient
    from app.dependencies import get_catalogue
    from app.main import app

    app.dependency_overrides[get_catalogue] = lambda: catalogue
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
