# ================================
# SCHEMAS PACKAGE INITIALIZATION (schemas/__init__.py)
# ================================

"""
Pydantic Schemas Package

Zentrale Imports für alle Schemas im System
"""

# Base Schemas
from app.schemas.base import (
    BaseSchema,
    FrozenSchema,
    ErrorResponse
)

# Catalogue Schemas
from app.schemas.catalogue import (
    UnitCategory,
    BillingPeriod,
    RentalUnitOption,
    AddonOption,
    ProvisionType,
    Catalogue,
    PROVISION_TYPES
)

# Pricing Schemas
from app.schemas.pricing import (
    Zusatzleistungen,
    Selection,
    PriceBreakdown,
    FormattedPriceBreakdown,
    PriceValidationResult,
    PriceCalculationResponse,
    PriceValidationRequest
)

# Booking Schemas
from app.schemas.booking import (
    BookingStatus,
    PackageSummaryItem,
    PackageSummary,
    PackageData,
    Booking,
    StatusLabel,
    StatusCounts,
    TrialWindow,
    TrialPhase,
    TrialState
)

# Package Tracking Schemas
from app.schemas.package_tracking import (
    PackageType,
    PackageTrackingStatus,
    PackageTrackingEntry,
    PackageStatusUpdate
)
