"""
Booking Lifecycle Service

Derives display state for bookings and trial periods:
- booking status labels and filter-tab counts
- trial countdown phase (active / expiring soon / last day / expired / cancelled)
- monotonic status transitions pending → confirmed → active → completed
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Union

from app.core.exceptions import InvalidStatusTransitionError
from app.schemas.booking import (
    Booking,
    BookingStatus,
    StatusCounts,
    StatusLabel,
    TrialPhase,
    TrialState,
    TrialWindow,
)

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)

TRIAL_WARNING_DAYS = 3
TRIAL_URGENT_DAYS = 1

# (text, color class, icon)
STATUS_LABELS: Dict[BookingStatus, tuple] = {
    BookingStatus.PENDING: ("In Bearbeitung", "bg-yellow-100 text-yellow-800", "clock"),
    BookingStatus.CONFIRMED: ("Bestätigt", "bg-green-100 text-green-800", "check-circle"),
    BookingStatus.ACTIVE: ("Aktiv", "bg-blue-100 text-blue-800", "home"),
    BookingStatus.COMPLETED: ("Abgeschlossen", "bg-gray-100 text-gray-800", "archive"),
}
UNKNOWN_STATUS_LABEL = ("Unbekannt", "bg-gray-100 text-gray-800", "help-circle")

# Buchungen laufen nur vorwärts
VALID_TRANSITIONS: Dict[BookingStatus, List[BookingStatus]] = {
    BookingStatus.PENDING: [BookingStatus.CONFIRMED],
    BookingStatus.CONFIRMED: [BookingStatus.ACTIVE],
    BookingStatus.ACTIVE: [BookingStatus.COMPLETED],
    BookingStatus.COMPLETED: [],
}


def parse_status(value: Union[str, BookingStatus, None]):
    """Return the BookingStatus for a raw value, or None if it is unknown"""
    if isinstance(value, BookingStatus):
        return value
    try:
        return BookingStatus(value)
    except ValueError:
        return None


class BookingLifecycleService:
    """Service for booking status and trial state derivation"""

    # ================================
    # TRIAL
    # ================================

    @staticmethod
    def create_trial_window(start: datetime) -> TrialWindow:
        """30-day Probemonat starting at `start`"""
        return TrialWindow.starting_at(start)

    @staticmethod
    def payment_liable_from(trial_window: TrialWindow) -> datetime:
        """Payment starts the moment the trial ends"""
        return trial_window.trial_end_date

    @staticmethod
    def days_remaining(now: datetime, trial_end_date: datetime) -> int:
        """Whole days left, rounded up; 0 once the trial has ended"""
        remaining = trial_end_date - now
        if remaining <= timedelta(0):
            return 0
        # ceil via negated floor division, exact on timedelta
        return -((-remaining) // ONE_DAY)

    @staticmethod
    def derive_trial_state(
        now: datetime,
        trial_window: TrialWindow,
        account_cancelled: bool = False,
        strict: bool = False,
        warning_days: int = TRIAL_WARNING_DAYS,
        urgent_days: int = TRIAL_URGENT_DAYS
    ) -> TrialState:
        """
        Derive the trial phase at `now`.

        Priority: cancelled > expired > last_day > expiring_soon > active.
        With `strict`, access is blocked once no days remain.
        """
        if trial_window is None:
            raise TypeError("trial_window is required")

        days_remaining = BookingLifecycleService.days_remaining(now, trial_window.trial_end_date)

        if account_cancelled:
            phase = TrialPhase.CANCELLED
        elif now >= trial_window.trial_end_date:
            phase = TrialPhase.EXPIRED
        elif days_remaining <= urgent_days:
            phase = TrialPhase.LAST_DAY
        elif days_remaining <= warning_days:
            phase = TrialPhase.EXPIRING_SOON
        else:
            phase = TrialPhase.ACTIVE

        counting_down = not account_cancelled
        return TrialState(
            phase=phase,
            days_remaining=days_remaining,
            show_warning=counting_down and days_remaining <= warning_days,
            is_urgent=counting_down and days_remaining <= urgent_days,
            access_blocked=strict and days_remaining <= 0,
            trial_end_date=trial_window.trial_end_date
        )

    # ================================
    # STATUS LABELS & COUNTS
    # ================================

    @staticmethod
    def derive_status_label(booking: Union[Booking, BookingStatus, str]) -> StatusLabel:
        """Map a booking status to its badge; unknown values get a gray fallback"""
        raw_status = booking.status if isinstance(booking, Booking) else booking
        status = parse_status(raw_status)

        if status is None:
            logger.warning(f"Unknown booking status: '{raw_status}'. Using fallback.")
            text, color_class, icon = UNKNOWN_STATUS_LABEL
            return StatusLabel(
                status=str(raw_status) if raw_status is not None else "",
                text=text,
                color_class=color_class,
                icon=icon,
                is_known=False
            )

        text, color_class, icon = STATUS_LABELS[status]
        return StatusLabel(status=status.value, text=text, color_class=color_class, icon=icon)

    @staticmethod
    def aggregate_status_counts(bookings: Iterable[Booking]) -> StatusCounts:
        """Counts per status for the filter tabs, in a single pass"""
        counts = {status: 0 for status in BookingStatus}
        total = 0
        for booking in bookings:
            total += 1
            status = parse_status(booking.status)
            if status is not None:
                counts[status] += 1

        return StatusCounts(
            all=total,
            pending=counts[BookingStatus.PENDING],
            confirmed=counts[BookingStatus.CONFIRMED],
            active=counts[BookingStatus.ACTIVE],
            completed=counts[BookingStatus.COMPLETED]
        )

    # ================================
    # TRANSITIONS
    # ================================

    @staticmethod
    def advance_status(booking: Booking, target: BookingStatus, at: datetime) -> Booking:
        """
        Move a booking one step forward and stamp the matching timestamp.

        Returns a new Booking; the input is left untouched.

        Raises:
            InvalidStatusTransitionError: for skips, regressions and unknown statuses
        """
        current = parse_status(booking.status)
        if current is None or target not in VALID_TRANSITIONS[current]:
            raise InvalidStatusTransitionError(str(booking.status), target.value)

        update = {"status": target.value}
        if target == BookingStatus.CONFIRMED:
            update["confirmed_at"] = at
        elif target == BookingStatus.ACTIVE:
            update["actual_start_date"] = booking.actual_start_date or at
        elif target == BookingStatus.COMPLETED:
            update["completed_at"] = at

        logger.info(f"Booking {booking.id}: status {current.value} -> {target.value}")
        return booking.model_copy(update=update)

    @staticmethod
    def find_inconsistencies(booking: Booking) -> List[str]:
        """confirmed_at must be set exactly when the booking is past pending"""
        problems = []
        status = parse_status(booking.status)
        if status is None:
            problems.append(f"unknown status '{booking.status}'")
            return problems

        past_pending = status != BookingStatus.PENDING
        if past_pending and booking.confirmed_at is None:
            problems.append(f"status '{status.value}' requires confirmed_at")
        if not past_pending and booking.confirmed_at is not None:
            problems.append("pending booking must not have confirmed_at")
        if booking.confirmed_at is not None and booking.confirmed_at < booking.requested_at:
            problems.append("confirmed_at lies before requested_at")
        return problems
