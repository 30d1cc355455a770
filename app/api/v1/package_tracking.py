"""
Package Tracking API Endpoints

Status changes for parcels of the Lager- und Versandservice.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.dependencies import get_audit_logger
from app.schemas.package_tracking import PackageStatusUpdate, PackageTrackingEntry
from app.services.package_tracking_service import PackageTrackingService
from app.utils.audit import AuditLogger

router = APIRouter()


@router.post("/transition", response_model=PackageTrackingEntry)
async def update_package_status(
    request: PackageStatusUpdate,
    audit_logger: AuditLogger = Depends(get_audit_logger)
):
    """Apply a validated status change to a tracked package"""
    updated = PackageTrackingService.update_status(
        request.entry,
        request.status,
        admin_id=request.admin_id,
        at=request.at or datetime.now(timezone.utc),
        notizen=request.notizen
    )

    audit_logger.log_status_change(
        resource_type="package",
        resource_id=request.entry.vertrag_id,
        old_status=request.entry.status.value,
        new_status=updated.status.value,
        user_id=request.admin_id,
        additional_context={"package_typ": request.entry.package_typ.value}
    )
    return updated
