# ================================
# BOOKING SCHEMAS (schemas/booking.py)
# ================================

from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple
from pydantic import Field, field_validator, model_validator

from app.schemas.base import BaseSchema, FrozenSchema
from app.schemas.pricing import PriceBreakdown, Selection, Zusatzleistungen

class BookingStatus(str, Enum):
    """Buchungsstatus: pending → confirmed → active → completed"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ACTIVE = "active"
    COMPLETED = "completed"

# ================================
# PACKAGE SUMMARY & SNAPSHOT
# ================================

class PackageSummaryItem(FrozenSchema):
    unit_id: str
    name: str
    count: int
    price: Decimal
    price_on_request: bool = False

class PackageSummary(FrozenSchema):
    """Mietfächer mit Gesamtpreis je Position plus Zusatzleistungen"""
    mietfaecher: Tuple[PackageSummaryItem, ...] = ()
    zusatzleistungen: Zusatzleistungen = Field(default_factory=Zusatzleistungen)

class PackageData(FrozenSchema):
    """Eingefrorener Stand zum Zeitpunkt der Buchungsanfrage"""
    selection: Selection
    breakdown: PriceBreakdown
    summary: PackageSummary
    captured_at: datetime

# ================================
# BOOKING
# ================================

class Booking(BaseSchema):
    """Buchungsanfrage eines Vendors"""
    id: str
    package_data: Optional[PackageData] = None
    # Rohwert; unbekannte Status werden beim Rendern abgefangen
    status: str = BookingStatus.PENDING.value
    requested_at: datetime
    confirmed_at: Optional[datetime] = None
    scheduled_start_date: Optional[datetime] = None
    actual_start_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    is_trial_booking: bool = False
    payment_liable_from: Optional[datetime] = None
    assigned_rental_unit_ids: List[str] = Field(default_factory=list)
    comments: Optional[str] = None

class StatusLabel(FrozenSchema):
    status: str
    text: str
    color_class: str
    icon: str
    is_known: bool = True

class StatusCounts(FrozenSchema):
    all: int = 0
    pending: int = 0
    confirmed: int = 0
    active: int = 0
    completed: int = 0

# ================================
# TRIAL
# ================================

# Probemonat: Ende = Start + 30 Tage
TRIAL_DURATION_DAYS = 30

def require_timezone(value: Optional[datetime]) -> Optional[datetime]:
    """Naive Zeitpunkte lassen sich nicht mit tz-behafteten vergleichen"""
    if value is not None and value.utcoffset() is None:
        raise ValueError("datetime must include a timezone offset, e.g. 2025-09-01T10:00:00Z")
    return value

class TrialWindow(FrozenSchema):
    """Probemonat: Ende = Start + 30 Tage"""
    trial_start_date: datetime
    trial_end_date: datetime

    @field_validator('trial_start_date', 'trial_end_date')
    @classmethod
    def validate_timezone(cls, v: datetime) -> datetime:
        return require_timezone(v)

    @model_validator(mode="after")
    def check_duration(self):
        if self.trial_end_date - self.trial_start_date != timedelta(days=TRIAL_DURATION_DAYS):
            raise ValueError(f"trial_end_date must be exactly {TRIAL_DURATION_DAYS} days after trial_start_date")
        return self

    @classmethod
    def starting_at(cls, start: datetime) -> "TrialWindow":
        return cls(trial_start_date=start, trial_end_date=start + timedelta(days=TRIAL_DURATION_DAYS))

class TrialPhase(str, Enum):
    ACTIVE = "active"
    EXPIRING_SOON = "expiring_soon"
    LAST_DAY = "last_day"
    EXPIRED = "expired"
    CANCELLED = "cancelled"

class TrialState(FrozenSchema):
    phase: TrialPhase
    days_remaining: int
    show_warning: bool
    is_urgent: bool
    access_blocked: bool
    trial_end_date: datetime

# ================================
# API REQUEST/RESPONSE SCHEMAS
# ================================

class StatusLabelRequest(BaseSchema):
    status: str

class StatusCountsRequest(BaseSchema):
    bookings: List[Booking]

class BookingTransitionRequest(BaseSchema):
    booking: Booking
    target_status: BookingStatus
    at: Optional[datetime] = None

class TrialStateRequest(BaseSchema):
    trial_window: TrialWindow
    account_cancelled: bool = False
    strict: bool = False
    now: Optional[datetime] = None

    @field_validator('now')
    @classmethod
    def validate_timezone(cls, v: Optional[datetime]) -> Optional[datetime]:
        return require_timezone(v)

class TrialWindowRequest(BaseSchema):
    trial_start_date: datetime

    @field_validator('trial_start_date')
    @classmethod
    def validate_timezone(cls, v: datetime) -> datetime:
        return require_timezone(v)

class TrialWindowResponse(BaseSchema):
    trial_window: TrialWindow
    payment_liable_from: datetime
