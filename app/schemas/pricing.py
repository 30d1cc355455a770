# ================================
# PRICING SCHEMAS (schemas/pricing.py)
# ================================

from decimal import Decimal
from typing import Dict, List, Optional, Set
from pydantic import Field, field_serializer

from app.schemas.base import BaseSchema, FrozenSchema

class Zusatzleistungen(FrozenSchema):
    """Logistik-Zusatzleistungen mit festen Monatspauschalen"""
    lagerservice: bool = False
    versandservice: bool = False

    @property
    def any_selected(self) -> bool:
        return self.lagerservice or self.versandservice

class Selection(BaseSchema):
    """Auswahl des Vendors im Package Builder"""
    selected_provision_type: str = "basic"
    unit_counts: Dict[str, int] = Field(default_factory=dict)
    selected_addon_ids: Set[str] = Field(default_factory=set)
    zusatzleistungen: Zusatzleistungen = Field(default_factory=Zusatzleistungen)
    rental_duration_months: int = 3

    @field_serializer("selected_addon_ids")
    def serialize_addon_ids(self, addon_ids: Set[str]) -> List[str]:
        return sorted(addon_ids)

class PriceBreakdown(FrozenSchema):
    """Ungerundete Preisaufstellung pro Monat"""
    unit_costs: Decimal
    addon_costs: Decimal
    zusatzleistungen_costs: Decimal
    subtotal: Decimal
    discount_rate: Decimal
    discount_amount: Decimal
    monthly_total: Decimal
    provision_rate: Decimal

    # Informativ, nicht Teil der Monatssumme
    rental_duration_months: int
    total_for_duration: Decimal
    provision_monthly_amount: Decimal

class FormattedPriceBreakdown(FrozenSchema):
    """Auf Anzeige gerundete Preisaufstellung"""
    unit_costs: Decimal
    addon_costs: Decimal
    zusatzleistungen_costs: Decimal
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    monthly_total: Decimal
    total_for_duration: Decimal
    provision_rate: Decimal
    provision_monthly_amount: Decimal
    monthly_total_display: str

class PriceValidationResult(FrozenSchema):
    valid: bool
    difference: Optional[Decimal] = None

# ================================
# API REQUEST/RESPONSE SCHEMAS
# ================================

class PriceCalculationResponse(BaseSchema):
    breakdown: PriceBreakdown
    formatted: FormattedPriceBreakdown
    warnings: List[str] = Field(default_factory=list)

class PriceValidationRequest(BaseSchema):
    selection: Selection
    client_total: Decimal
