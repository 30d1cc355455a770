"""
Booking API Endpoints

Stateless helpers around the booking lifecycle: snapshots, status badges,
filter counts and status transitions. Bookings are passed in the request body.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.dependencies import get_audit_logger, get_catalogue, get_request_id, get_settings
from app.schemas.booking import (
    Booking,
    BookingTransitionRequest,
    PackageData,
    StatusCounts,
    StatusCountsRequest,
    StatusLabel,
    StatusLabelRequest,
)
from app.schemas.catalogue import Catalogue
from app.schemas.pricing import Selection
from app.services.booking_lifecycle_service import BookingLifecycleService
from app.services.package_summary_service import PackageSummaryService
from app.utils.audit import AuditLogger

router = APIRouter()


@router.post("/snapshot", response_model=PackageData)
async def create_package_snapshot(
    selection: Selection,
    catalogue: Catalogue = Depends(get_catalogue),
    app_settings=Depends(get_settings),
    audit_logger: AuditLogger = Depends(get_audit_logger)
):
    """Freeze the current selection and prices for a booking request"""
    snapshot = PackageSummaryService.create_snapshot(
        catalogue,
        selection,
        captured_at=datetime.now(timezone.utc),
        lagerservice_price=app_settings.LAGERSERVICE_PRICE,
        versandservice_price=app_settings.VERSANDSERVICE_PRICE
    )
    audit_logger.log_price_calculation(snapshot.breakdown, source="booking")
    return snapshot


@router.post("/status-label", response_model=StatusLabel)
async def get_status_label(request: StatusLabelRequest):
    """Badge text, color class and icon for a booking status"""
    return BookingLifecycleService.derive_status_label(request.status)


@router.post("/status-counts", response_model=StatusCounts)
async def get_status_counts(request: StatusCountsRequest):
    """Counts per status for the filter tabs"""
    return BookingLifecycleService.aggregate_status_counts(request.bookings)


@router.post("/transition", response_model=Booking)
async def transition_booking(
    request: BookingTransitionRequest,
    audit_logger: AuditLogger = Depends(get_audit_logger),
    request_id: str = Depends(get_request_id)
):
    """Advance a booking to the next status"""
    at = request.at or datetime.now(timezone.utc)
    booking = BookingLifecycleService.advance_status(request.booking, request.target_status, at)

    audit_logger.log_status_change(
        resource_type="booking",
        resource_id=booking.id,
        old_status=request.booking.status,
        new_status=booking.status,
        additional_context={"request_id": request_id}
    )
    return booking
