# ================================
# CATALOGUE SCHEMAS (schemas/catalogue.py)
# ================================

from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple
from pydantic import Field

from app.schemas.base import FrozenSchema

WEEKS_PER_MONTH = 4

class UnitCategory(str, Enum):
    """Kategorien der Mietfächer (nur Darstellung)"""
    STANDARD = "standard"
    COOLED = "cooled"
    PREMIUM = "premium"
    VISIBILITY = "visibility"

class BillingPeriod(str, Enum):
    MONTHLY = "monthly"
    WEEKLY = "weekly"

class RentalUnitOption(FrozenSchema):
    """Mietfach im Katalog, z.B. 'Verkaufsblock Lage A'"""
    id: str = Field(..., min_length=1)
    name: str
    monthly_price: Optional[Decimal] = Field(None, ge=0, description="None = Preis auf Anfrage")
    category: UnitCategory = UnitCategory.STANDARD
    description: Optional[str] = None

    @property
    def is_price_on_request(self) -> bool:
        return self.monthly_price is None

class AddonOption(FrozenSchema):
    """Zubuchbare Leistung aus dem Katalog (z.B. Schaufenster)"""
    id: str = Field(..., min_length=1)
    name: str
    monthly_price: Decimal = Field(..., ge=0)
    requires_premium_provision: bool = False
    billing_period: BillingPeriod = BillingPeriod.MONTHLY

    @property
    def monthly_equivalent(self) -> Decimal:
        """Wochenpreise werden auf einen 4-Wochen-Monat normalisiert"""
        if self.billing_period == BillingPeriod.WEEKLY:
            return self.monthly_price * WEEKS_PER_MONTH
        return self.monthly_price

class ProvisionType(FrozenSchema):
    """Provisionsmodell des Direktvermarkters"""
    id: str
    name: str
    rate: Decimal = Field(..., ge=0, description="Provision in Prozent")

BASIC_PROVISION = ProvisionType(id="basic", name="Basismodell", rate=Decimal("4"))
PREMIUM_PROVISION = ProvisionType(id="premium", name="Premium-Modell", rate=Decimal("7"))
PROVISION_TYPES: Tuple[ProvisionType, ...] = (BASIC_PROVISION, PREMIUM_PROVISION)

class Catalogue(FrozenSchema):
    """Unveränderlicher Katalog, wird explizit an die Services übergeben"""
    units: Tuple[RentalUnitOption, ...] = ()
    addons: Tuple[AddonOption, ...] = ()
    provision_types: Tuple[ProvisionType, ...] = PROVISION_TYPES

    def find_unit(self, unit_id: str) -> Optional[RentalUnitOption]:
        return find_by_id(self.units, unit_id)

    def find_addon(self, addon_id: str) -> Optional[AddonOption]:
        return find_by_id(self.addons, addon_id)

    def find_provision_type(self, provision_type_id: str) -> Optional[ProvisionType]:
        return find_by_id(self.provision_types, provision_type_id)

def find_by_id(options, option_id: str):
    """Lineare Suche; Kataloge sind klein und statisch"""
    for option in options:
        if option.id == option_id:
            return option
    return None
