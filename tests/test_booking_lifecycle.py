# ================================
# BOOKING LIFECYCLE TESTS (test_booking_lifecycle.py)
# ================================

from datetime import datetime, timedelta, timezone

import pytest

from app.core.exceptions import InvalidStatusTransitionError
from app.schemas.booking import Booking, BookingStatus, TrialPhase, TrialWindow
from app.services.booking_lifecycle_service import BookingLifecycleService


@pytest.fixture
def trial_window():
    return BookingLifecycleService.create_trial_window(datetime(2025, 9, 1, 10, 0, tzinfo=timezone.utc))


def make_booking(status="pending", **kwargs):
    return Booking(
        id=kwargs.pop("id", "booking-1"),
        status=status,
        requested_at=datetime(2025, 9, 1, 8, 0, tzinfo=timezone.utc),
        **kwargs
    )


class TestTrialWindow:
    """30-day Probemonat."""

    def test_trial_lasts_thirty_days(self, trial_window):
        assert trial_window.trial_end_date - trial_window.trial_start_date == timedelta(days=30)

    def test_payment_starts_at_trial_end(self, trial_window):
        assert BookingLifecycleService.payment_liable_from(trial_window) == trial_window.trial_end_date

    def test_end_before_start_is_rejected(self):
        start = datetime(2025, 9, 1, tzinfo=timezone.utc)
        with pytest.raises(ValueError):
            TrialWindow(trial_start_date=start, trial_end_date=start - timedelta(days=1))

    @pytest.mark.parametrize("duration", [timedelta(days=29), timedelta(days=30, seconds=1), timedelta(days=365)])
    def test_window_must_last_exactly_thirty_days(self, duration):
        start = datetime(2025, 9, 1, tzinfo=timezone.utc)
        with pytest.raises(ValueError):
            TrialWindow(trial_start_date=start, trial_end_date=start + duration)

    def test_offsets_may_differ(self):
        start = datetime(2025, 9, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        end = datetime(2025, 10, 1, 10, 0, tzinfo=timezone.utc)

        window = TrialWindow(trial_start_date=start, trial_end_date=end)

        assert window.trial_end_date - window.trial_start_date == timedelta(days=30)

    def test_naive_dates_are_rejected(self):
        start = datetime(2025, 9, 1, 10, 0)
        with pytest.raises(ValueError):
            TrialWindow(trial_start_date=start, trial_end_date=start.replace(tzinfo=timezone.utc) + timedelta(days=30))
        with pytest.raises(ValueError):
            TrialWindow(trial_start_date=start, trial_end_date=start + timedelta(days=30))


class TestDaysRemaining:
    """Ceiling of the remaining time in days."""

    @pytest.mark.parametrize("remaining, expected", [
        (timedelta(days=10), 10),
        (timedelta(days=2, hours=1), 3),
        (timedelta(hours=12), 1),
        (timedelta(seconds=1), 1),
        (timedelta(0), 0),
        (timedelta(days=-3), 0),
    ])
    def test_rounds_up(self, remaining, expected):
        end = datetime(2025, 10, 1, tzinfo=timezone.utc)
        assert BookingLifecycleService.days_remaining(end - remaining, end) == expected


class TestDeriveTrialState:
    """Trial phase priority and flags."""

    def test_active_early_in_trial(self, trial_window):
        state = BookingLifecycleService.derive_trial_state(
            trial_window.trial_end_date - timedelta(days=10), trial_window
        )

        assert state.phase == TrialPhase.ACTIVE
        assert state.days_remaining == 10
        assert not state.show_warning
        assert not state.is_urgent

    def test_expiring_soon(self, trial_window):
        state = BookingLifecycleService.derive_trial_state(
            trial_window.trial_end_date - timedelta(days=2, hours=1), trial_window
        )

        assert state.phase == TrialPhase.EXPIRING_SOON
        assert state.days_remaining == 3
        assert state.show_warning
        assert not state.is_urgent

    def test_last_day_twelve_hours_before_end(self, trial_window):
        state = BookingLifecycleService.derive_trial_state(
            trial_window.trial_end_date - timedelta(hours=12), trial_window
        )

        assert state.phase == TrialPhase.LAST_DAY
        assert state.days_remaining == 1
        assert state.show_warning
        assert state.is_urgent
        assert not state.access_blocked

    def test_expired_at_end(self, trial_window):
        state = BookingLifecycleService.derive_trial_state(trial_window.trial_end_date, trial_window)

        assert state.phase == TrialPhase.EXPIRED
        assert state.days_remaining == 0
        assert not state.access_blocked

    def test_strict_mode_blocks_after_expiry(self, trial_window):
        state = BookingLifecycleService.derive_trial_state(
            trial_window.trial_end_date + timedelta(days=1), trial_window, strict=True
        )

        assert state.phase == TrialPhase.EXPIRED
        assert state.access_blocked

    def test_cancelled_wins_over_everything(self, trial_window):
        for now in (
            trial_window.trial_start_date,
            trial_window.trial_end_date - timedelta(hours=12),
            trial_window.trial_end_date + timedelta(days=5),
        ):
            state = BookingLifecycleService.derive_trial_state(now, trial_window, account_cancelled=True)

            assert state.phase == TrialPhase.CANCELLED
            assert not state.show_warning
            assert not state.is_urgent

    @pytest.mark.parametrize("before_end, phase", [
        (timedelta(days=3), TrialPhase.EXPIRING_SOON),
        (timedelta(days=3, seconds=1), TrialPhase.ACTIVE),
        (timedelta(days=1), TrialPhase.LAST_DAY),
        (timedelta(days=1, seconds=1), TrialPhase.EXPIRING_SOON),
    ])
    def test_phase_thresholds(self, trial_window, before_end, phase):
        state = BookingLifecycleService.derive_trial_state(trial_window.trial_end_date - before_end, trial_window)

        assert state.phase == phase

    def test_custom_thresholds(self, trial_window):
        state = BookingLifecycleService.derive_trial_state(
            trial_window.trial_end_date - timedelta(days=6), trial_window, warning_days=7
        )

        assert state.phase == TrialPhase.EXPIRING_SOON

    def test_missing_window_fails_fast(self):
        with pytest.raises(TypeError):
            BookingLifecycleService.derive_trial_state(datetime.now(timezone.utc), None)


class TestStatusLabels:
    """Badges for the booking list."""

    @pytest.mark.parametrize("status, text, icon", [
        ("pending", "In Bearbeitung", "clock"),
        ("confirmed", "Bestätigt", "check-circle"),
        ("active", "Aktiv", "home"),
        ("completed", "Abgeschlossen", "archive"),
    ])
    def test_known_statuses(self, status, text, icon):
        label = BookingLifecycleService.derive_status_label(status)

        assert label.text == text
        assert label.icon == icon
        assert label.is_known

    def test_accepts_booking_and_enum(self):
        from_booking = BookingLifecycleService.derive_status_label(make_booking("active"))
        from_enum = BookingLifecycleService.derive_status_label(BookingStatus.ACTIVE)

        assert from_booking == from_enum

    def test_unknown_status_gets_fallback(self, caplog):
        with caplog.at_level("WARNING"):
            label = BookingLifecycleService.derive_status_label("archived")

        assert label.text == "Unbekannt"
        assert "gray" in label.color_class
        assert not label.is_known
        assert label.status == "archived"
        assert "archived" in caplog.text


class TestStatusCounts:
    """Counts for the filter tabs."""

    def test_counts_per_status(self):
        statuses = ["pending", "pending", "confirmed", "active", "active", "active", "completed"]
        bookings = [make_booking(status, id=f"b{i}") for i, status in enumerate(statuses)]

        counts = BookingLifecycleService.aggregate_status_counts(bookings)

        assert counts.all == 7
        assert counts.pending == 2
        assert counts.confirmed == 1
        assert counts.active == 3
        assert counts.completed == 1

    def test_unknown_status_counts_only_towards_all(self):
        bookings = [make_booking("pending", id="b1"), make_booking("archived", id="b2")]

        counts = BookingLifecycleService.aggregate_status_counts(bookings)

        assert counts.all == 2
        assert counts.pending + counts.confirmed + counts.active + counts.completed == 1

    def test_empty_list(self):
        counts = BookingLifecycleService.aggregate_status_counts([])

        assert counts.all == 0


class TestAdvanceStatus:
    """Forward-only status transitions."""

    def test_full_lifecycle(self):
        at = datetime(2025, 9, 2, 9, 0, tzinfo=timezone.utc)
        booking = make_booking()

        confirmed = BookingLifecycleService.advance_status(booking, BookingStatus.CONFIRMED, at)
        active = BookingLifecycleService.advance_status(confirmed, BookingStatus.ACTIVE, at + timedelta(days=1))
        completed = BookingLifecycleService.advance_status(active, BookingStatus.COMPLETED, at + timedelta(days=90))

        assert confirmed.confirmed_at == at
        assert active.actual_start_date == at + timedelta(days=1)
        assert completed.completed_at == at + timedelta(days=90)
        assert completed.status == "completed"
        assert BookingLifecycleService.find_inconsistencies(completed) == []

    def test_input_booking_is_unchanged(self):
        booking = make_booking()

        BookingLifecycleService.advance_status(booking, BookingStatus.CONFIRMED, datetime.now(timezone.utc))

        assert booking.status == "pending"
        assert booking.confirmed_at is None

    @pytest.mark.parametrize("current, target", [
        ("pending", BookingStatus.ACTIVE),
        ("confirmed", BookingStatus.PENDING),
        ("completed", BookingStatus.ACTIVE),
        ("active", BookingStatus.ACTIVE),
        ("archived", BookingStatus.CONFIRMED),
    ])
    def test_invalid_transitions(self, current, target):
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            BookingLifecycleService.advance_status(make_booking(current), target, datetime.now(timezone.utc))

        assert exc_info.value.status_code == 409
        assert exc_info.value.error_code == "INVALID_STATUS_TRANSITION"


class TestFindInconsistencies:
    """confirmed_at consistency checks."""

    def test_confirmed_without_timestamp(self):
        assert BookingLifecycleService.find_inconsistencies(make_booking("confirmed"))

    def test_pending_with_timestamp(self):
        booking = make_booking("pending", confirmed_at=datetime(2025, 9, 2, tzinfo=timezone.utc))

        assert BookingLifecycleService.find_inconsistencies(booking)

    def test_confirmed_before_requested(self):
        booking = make_booking("confirmed", confirmed_at=datetime(2025, 8, 1, tzinfo=timezone.utc))

        problems = BookingLifecycleService.find_inconsistencies(booking)

        assert problems == ["confirmed_at lies before requested_at"]

    def test_unknown_status(self):
        assert BookingLifecycleService.find_inconsistencies(make_booking("archived")) == ["unknown status 'archived'"]
