"""
Price Calculation Service

Calculates the monthly price of a vendor package (Mietfächer, add-ons,
Zusatzleistungen) including duration-based discounts. Pure functions only:
no database, no clock, no randomness.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence

from app.core.exceptions import ValidationError
from app.schemas.catalogue import (
    AddonOption,
    BASIC_PROVISION,
    Catalogue,
    PROVISION_TYPES,
    ProvisionType,
    RentalUnitOption,
    find_by_id,
)
from app.schemas.pricing import (
    FormattedPriceBreakdown,
    PriceBreakdown,
    PriceValidationResult,
    Selection,
    Zusatzleistungen,
)

logger = logging.getLogger(__name__)

LAGERSERVICE_PRICE = Decimal("20")
VERSANDSERVICE_PRICE = Decimal("5")

# (Mindestlaufzeit in Monaten, Rabatt), absteigend sortiert
DISCOUNT_TIERS = (
    (12, Decimal("0.10")),
    (6, Decimal("0.05")),
)

CENT = Decimal("0.01")
ZERO = Decimal("0")


class PriceCalculationService:
    """Service for package price calculations"""

    @staticmethod
    def calculate_discount_rate(rental_duration_months: int) -> Decimal:
        """Step function over the rental duration: 12+ → 10%, 6+ → 5%, else 0"""
        for min_months, rate in DISCOUNT_TIERS:
            if rental_duration_months >= min_months:
                return rate
        return ZERO

    @staticmethod
    def calculate_unit_costs(
        units: Sequence[RentalUnitOption],
        unit_counts: Dict[str, int]
    ) -> Decimal:
        """Sum of count × monthly price; price-on-request units contribute 0"""
        total = ZERO
        for unit_id, count in unit_counts.items():
            count = max(0, count)
            if count == 0:
                continue

            unit = find_by_id(units, unit_id)
            if unit is None:
                logger.warning(f"Unknown rental unit id '{unit_id}' in selection, skipping")
                continue
            if unit.is_price_on_request:
                continue

            total += unit.monthly_price * count
        return total

    @staticmethod
    def calculate_addon_costs(
        addons: Sequence[AddonOption],
        addon_ids: Iterable[str]
    ) -> Decimal:
        """Sum of add-on prices, weekly prices normalised to a 4-week month"""
        total = ZERO
        # sorted: gleiche Summationsreihenfolge unabhängig von der Set-Reihenfolge
        for addon_id in sorted(addon_ids):
            addon = find_by_id(addons, addon_id)
            if addon is None:
                logger.warning(f"Unknown addon id '{addon_id}' in selection, skipping")
                continue
            total += addon.monthly_equivalent
        return total

    @staticmethod
    def calculate_zusatzleistungen_costs(
        zusatzleistungen: Zusatzleistungen,
        lagerservice_price: Decimal = LAGERSERVICE_PRICE,
        versandservice_price: Decimal = VERSANDSERVICE_PRICE
    ) -> Decimal:
        costs = ZERO
        if zusatzleistungen.lagerservice:
            costs += lagerservice_price
        if zusatzleistungen.versandservice:
            costs += versandservice_price
        return costs

    @staticmethod
    def resolve_provision_type(
        provision_type_id: str,
        provision_types: Sequence[ProvisionType] = PROVISION_TYPES
    ) -> ProvisionType:
        """Unknown provision types fall back to the basic model"""
        provision_type = find_by_id(provision_types, provision_type_id)
        if provision_type is None:
            logger.warning(f"Unknown provision type '{provision_type_id}', falling back to basic")
            return find_by_id(provision_types, BASIC_PROVISION.id) or BASIC_PROVISION
        return provision_type

    @staticmethod
    def calculate_breakdown(
        catalogue_units: Sequence[RentalUnitOption],
        catalogue_addons: Sequence[AddonOption],
        selection: Selection,
        provision_types: Sequence[ProvisionType] = PROVISION_TYPES,
        lagerservice_price: Decimal = LAGERSERVICE_PRICE,
        versandservice_price: Decimal = VERSANDSERVICE_PRICE
    ) -> PriceBreakdown:
        """
        Calculate the itemised monthly price breakdown for a selection.

        Missing catalogue ids contribute nothing; intermediate values are not
        rounded (see format_breakdown for display values).

        Raises:
            TypeError: if selection or a catalogue is missing entirely
        """
        if not isinstance(selection, Selection):
            raise TypeError(f"selection must be a Selection, got {type(selection).__name__}")
        if catalogue_units is None or catalogue_addons is None:
            raise TypeError("catalogue_units and catalogue_addons are required")

        unit_costs = PriceCalculationService.calculate_unit_costs(
            catalogue_units, selection.unit_counts
        )
        addon_costs = PriceCalculationService.calculate_addon_costs(
            catalogue_addons, selection.selected_addon_ids
        )
        zusatzleistungen_costs = PriceCalculationService.calculate_zusatzleistungen_costs(
            selection.zusatzleistungen, lagerservice_price, versandservice_price
        )

        subtotal = unit_costs + addon_costs + zusatzleistungen_costs
        discount_rate = PriceCalculationService.calculate_discount_rate(
            selection.rental_duration_months
        )
        discount_amount = subtotal * discount_rate
        monthly_total = subtotal - discount_amount

        provision_type = PriceCalculationService.resolve_provision_type(
            selection.selected_provision_type, provision_types
        )
        duration = max(0, selection.rental_duration_months)

        return PriceBreakdown(
            unit_costs=unit_costs,
            addon_costs=addon_costs,
            zusatzleistungen_costs=zusatzleistungen_costs,
            subtotal=subtotal,
            discount_rate=discount_rate,
            discount_amount=discount_amount,
            monthly_total=monthly_total,
            provision_rate=provision_type.rate,
            rental_duration_months=selection.rental_duration_months,
            total_for_duration=monthly_total * duration,
            provision_monthly_amount=monthly_total * provision_type.rate / Decimal("100"),
        )

    @staticmethod
    def calculate_for_catalogue(
        catalogue: Catalogue,
        selection: Selection,
        lagerservice_price: Decimal = LAGERSERVICE_PRICE,
        versandservice_price: Decimal = VERSANDSERVICE_PRICE
    ) -> PriceBreakdown:
        return PriceCalculationService.calculate_breakdown(
            catalogue.units,
            catalogue.addons,
            selection,
            provision_types=catalogue.provision_types,
            lagerservice_price=lagerservice_price,
            versandservice_price=versandservice_price,
        )

    @staticmethod
    def validate_selection(catalogue: Catalogue, selection: Selection) -> List[str]:
        """
        Collect human-readable warnings for a selection.

        The calculation itself never rejects a selection; these messages let
        the caller point out premium-only options and stale catalogue ids.
        """
        warnings = []
        is_premium = selection.selected_provision_type == "premium"

        if catalogue.find_provision_type(selection.selected_provision_type) is None:
            warnings.append(
                f"Unbekanntes Provisionsmodell '{selection.selected_provision_type}', Basismodell wird verwendet"
            )

        for unit_id, count in sorted(selection.unit_counts.items()):
            if count > 0 and catalogue.find_unit(unit_id) is None:
                warnings.append(f"Mietfach '{unit_id}' ist nicht im Katalog vorhanden")
            if count < 0:
                warnings.append(f"Negative Anzahl für Mietfach '{unit_id}' wird als 0 gewertet")

        for addon_id in sorted(selection.selected_addon_ids):
            addon = catalogue.find_addon(addon_id)
            if addon is None:
                warnings.append(f"Zusatzoption '{addon_id}' ist nicht im Katalog vorhanden")
            elif addon.requires_premium_provision and not is_premium:
                warnings.append(f"'{addon.name}' ist nur mit dem Premium-Modell buchbar")

        if selection.zusatzleistungen.any_selected and not is_premium:
            warnings.append("Zusatzleistungen sind nur mit dem Premium-Modell (7%) verfügbar")

        return warnings

    @staticmethod
    def validate_client_total(
        client_total: Decimal,
        breakdown: PriceBreakdown,
        tolerance: Decimal = CENT
    ) -> PriceValidationResult:
        """Compare a client-side monthly total with the authoritative one"""
        client_total = Decimal(str(client_total))
        if client_total < 0:
            raise ValidationError(f"Client total must not be negative, got {client_total}")

        expected = round_money(breakdown.monthly_total)
        difference = abs(client_total - expected)
        if difference <= tolerance:
            return PriceValidationResult(valid=True)
        return PriceValidationResult(valid=False, difference=difference)

    @staticmethod
    def format_breakdown(breakdown: PriceBreakdown) -> FormattedPriceBreakdown:
        """Round all amounts for display (2 decimals, discount as percent)"""
        return FormattedPriceBreakdown(
            unit_costs=round_money(breakdown.unit_costs),
            addon_costs=round_money(breakdown.addon_costs),
            zusatzleistungen_costs=round_money(breakdown.zusatzleistungen_costs),
            subtotal=round_money(breakdown.subtotal),
            discount_percent=(breakdown.discount_rate * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP),
            discount_amount=round_money(breakdown.discount_amount),
            monthly_total=round_money(breakdown.monthly_total),
            total_for_duration=round_money(breakdown.total_for_duration),
            provision_rate=breakdown.provision_rate,
            provision_monthly_amount=round_money(breakdown.provision_monthly_amount),
            monthly_total_display=format_currency(breakdown.monthly_total),
        )


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(value: Optional[Decimal]) -> str:
    """German display format, e.g. 1.234,50 €"""
    if value is None:
        return "auf Anfrage"
    formatted = f"{round_money(Decimal(value)):,.2f}"
    return formatted.replace(",", "X").replace(".", ",").replace("X", ".") + " €"
