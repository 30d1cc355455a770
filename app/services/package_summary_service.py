"""
Package Summary Service

Turns a selection into named line items and builds the frozen package
snapshot that is attached to a booking when it is submitted.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Sequence

from app.schemas.booking import PackageData, PackageSummary, PackageSummaryItem
from app.schemas.catalogue import Catalogue, RentalUnitOption, find_by_id
from app.schemas.pricing import Selection
from app.services.price_calculation_service import (
    LAGERSERVICE_PRICE,
    VERSANDSERVICE_PRICE,
    PriceCalculationService,
)

logger = logging.getLogger(__name__)


class PackageSummaryService:
    """Service for package summaries and booking snapshots"""

    @staticmethod
    def project_summary(
        catalogue_units: Sequence[RentalUnitOption],
        selection: Selection
    ) -> PackageSummary:
        """One line item per selected Mietfach with its extended price"""
        if not isinstance(selection, Selection):
            raise TypeError(f"selection must be a Selection, got {type(selection).__name__}")

        items = []
        for unit_id, count in selection.unit_counts.items():
            if count <= 0:
                continue
            unit = find_by_id(catalogue_units, unit_id)
            if unit is None:
                logger.warning(f"Unknown rental unit id '{unit_id}' in summary, skipping")
                continue

            price = Decimal("0") if unit.is_price_on_request else unit.monthly_price * count
            items.append(PackageSummaryItem(
                unit_id=unit.id,
                name=unit.name,
                count=count,
                price=price,
                price_on_request=unit.is_price_on_request
            ))

        return PackageSummary(
            mietfaecher=tuple(items),
            zusatzleistungen=selection.zusatzleistungen
        )

    @staticmethod
    def create_snapshot(
        catalogue: Catalogue,
        selection: Selection,
        captured_at: datetime,
        lagerservice_price: Decimal = LAGERSERVICE_PRICE,
        versandservice_price: Decimal = VERSANDSERVICE_PRICE
    ) -> PackageData:
        """
        Freeze selection, breakdown and summary at submission time.

        The selection is copied so later edits in the package builder do not
        leak into the stored booking. The snapshot is never recomputed.
        """
        frozen_selection = selection.model_copy(deep=True)
        breakdown = PriceCalculationService.calculate_for_catalogue(
            catalogue, frozen_selection, lagerservice_price, versandservice_price
        )
        summary = PackageSummaryService.project_summary(catalogue.units, frozen_selection)

        return PackageData(
            selection=frozen_selection,
            breakdown=breakdown,
            summary=summary,
            captured_at=captured_at
        )

    @staticmethod
    def calculated_monthly_price(package_data: PackageData) -> Decimal:
        """Monthly price as stored in the snapshot"""
        return package_data.breakdown.monthly_total
