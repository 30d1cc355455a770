"""
Trial API Endpoints

Countdown state of the 30-day Probemonat.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.dependencies import get_settings
from app.schemas.booking import (
    TrialState,
    TrialStateRequest,
    TrialWindowRequest,
    TrialWindowResponse,
)
from app.services.booking_lifecycle_service import BookingLifecycleService

router = APIRouter()


@router.post("/state", response_model=TrialState)
async def get_trial_state(
    request: TrialStateRequest,
    app_settings=Depends(get_settings)
):
    """Derive the trial phase; `now` defaults to the current time"""
    now = request.now or datetime.now(timezone.utc)

    return BookingLifecycleService.derive_trial_state(
        now,
        request.trial_window,
        account_cancelled=request.account_cancelled,
        strict=request.strict,
        warning_days=app_settings.TRIAL_WARNING_DAYS,
        urgent_days=app_settings.TRIAL_URGENT_DAYS
    )


@router.post("/window", response_model=TrialWindowResponse)
async def create_trial_window(
    request: TrialWindowRequest
):
    """Trial window for a new vendor account and the start of payment liability"""
    trial_window = BookingLifecycleService.create_trial_window(request.trial_start_date)
    return TrialWindowResponse(
        trial_window=trial_window,
        payment_liable_from=BookingLifecycleService.payment_liable_from(trial_window)
    )
