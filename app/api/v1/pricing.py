"""
Pricing API Endpoints

Quote calculation, client price validation and package summaries.
"""

from fastapi import APIRouter, Depends

from app.dependencies import get_audit_logger, get_catalogue, get_settings
from app.schemas.booking import PackageSummary
from app.schemas.catalogue import Catalogue
from app.schemas.pricing import (
    PriceCalculationResponse,
    PriceValidationRequest,
    PriceValidationResult,
    Selection,
)
from app.services.package_summary_service import PackageSummaryService
from app.services.price_calculation_service import PriceCalculationService
from app.utils.audit import AuditLogger

router = APIRouter()


@router.get("/catalogue", response_model=Catalogue)
async def get_catalogue_options(catalogue: Catalogue = Depends(get_catalogue)):
    """Rental units, add-ons and provision models"""
    return catalogue


@router.post("/calculate", response_model=PriceCalculationResponse)
async def calculate_price(
    selection: Selection,
    catalogue: Catalogue = Depends(get_catalogue),
    app_settings=Depends(get_settings)
):
    """Calculate the monthly price breakdown for a package selection"""
    breakdown = PriceCalculationService.calculate_for_catalogue(
        catalogue,
        selection,
        lagerservice_price=app_settings.LAGERSERVICE_PRICE,
        versandservice_price=app_settings.VERSANDSERVICE_PRICE
    )
    return PriceCalculationResponse(
        breakdown=breakdown,
        formatted=PriceCalculationService.format_breakdown(breakdown),
        warnings=PriceCalculationService.validate_selection(catalogue, selection)
    )


@router.post("/validate", response_model=PriceValidationResult)
async def validate_client_price(
    request: PriceValidationRequest,
    catalogue: Catalogue = Depends(get_catalogue),
    app_settings=Depends(get_settings),
    audit_logger: AuditLogger = Depends(get_audit_logger)
):
    """Check a client-side monthly total against the backend calculation"""
    breakdown = PriceCalculationService.calculate_for_catalogue(
        catalogue,
        request.selection,
        lagerservice_price=app_settings.LAGERSERVICE_PRICE,
        versandservice_price=app_settings.VERSANDSERVICE_PRICE
    )
    audit_logger.log_price_calculation(breakdown, source="validation")

    return PriceCalculationService.validate_client_total(
        request.client_total, breakdown, tolerance=app_settings.PRICE_TOLERANCE
    )


@router.post("/summary", response_model=PackageSummary)
async def get_package_summary(
    selection: Selection,
    catalogue: Catalogue = Depends(get_catalogue)
):
    """Named line items for the selected rental units"""
    return PackageSummaryService.project_summary(catalogue.units, selection)
