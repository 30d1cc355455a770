"""Default catalogue of the housnkuh store (Mietfächer and Schaufenster)"""

from decimal import Decimal

from app.schemas.catalogue import (
    AddonOption,
    Catalogue,
    PROVISION_TYPES,
    RentalUnitOption,
    UnitCategory,
)

DEFAULT_RENTAL_UNITS = (
    RentalUnitOption(
        id="block-a",
        name="Verkaufsblock Lage A",
        monthly_price=Decimal("35"),
        category=UnitCategory.STANDARD,
        description="Regalfläche auf Augenhöhe"
    ),
    RentalUnitOption(
        id="block-b",
        name="Verkaufsblock Lage B",
        monthly_price=Decimal("15"),
        category=UnitCategory.STANDARD,
        description="Regalfläche unten oder oben"
    ),
    RentalUnitOption(
        id="block-cold",
        name="Verkaufsblock gekühlt",
        monthly_price=Decimal("50"),
        category=UnitCategory.COOLED,
        description="Kühlregal"
    ),
    RentalUnitOption(
        id="block-frozen",
        name="Verkaufsblock gefroren",
        monthly_price=Decimal("60"),
        category=UnitCategory.COOLED,
        description="Gefrierfach"
    ),
    RentalUnitOption(
        id="block-table",
        name="Verkaufstisch",
        monthly_price=Decimal("40"),
        category=UnitCategory.PREMIUM,
        description="Freistehender Verkaufstisch im Eingangsbereich"
    ),
    RentalUnitOption(
        id="block-other",
        name="Flexibler Bereich",
        monthly_price=None,  # auf Anfrage
        category=UnitCategory.STANDARD,
        description="Individuelle Fläche nach Absprache"
    ),
)

DEFAULT_ADDONS = (
    AddonOption(id="window-small", name="Schaufenster klein", monthly_price=Decimal("30")),
    AddonOption(id="window-large", name="Schaufenster groß", monthly_price=Decimal("60")),
)

DEFAULT_CATALOGUE = Catalogue(
    units=DEFAULT_RENTAL_UNITS,
    addons=DEFAULT_ADDONS,
    provision_types=PROVISION_TYPES
)
