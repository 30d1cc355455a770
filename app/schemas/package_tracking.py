# ================================
# PACKAGE TRACKING SCHEMAS (schemas/package_tracking.py)
# ================================

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import Field

from app.schemas.base import BaseSchema, FrozenSchema

class PackageType(str, Enum):
    LAGERSERVICE = "lagerservice"
    VERSANDSERVICE = "versandservice"

class PackageTrackingStatus(str, Enum):
    """Paketstatus für Lager- und Versandservice"""
    ERWARTET = "erwartet"
    ANGEKOMMEN = "angekommen"
    EINGELAGERT = "eingelagert"
    VERSANDT = "versandt"
    ZUGESTELLT = "zugestellt"

class PackageTrackingEntry(FrozenSchema):
    vertrag_id: str
    package_typ: PackageType
    status: PackageTrackingStatus = PackageTrackingStatus.ERWARTET
    created_at: datetime
    updated_at: datetime
    ankunft_datum: Optional[datetime] = None
    einlagerung_datum: Optional[datetime] = None
    versand_datum: Optional[datetime] = None
    zustellung_datum: Optional[datetime] = None
    bestaetigt_von: Optional[str] = None
    notizen: Optional[str] = Field(None, max_length=500)
    tracking_nummer: Optional[str] = None

class PackageStatusUpdate(BaseSchema):
    entry: PackageTrackingEntry
    status: PackageTrackingStatus
    admin_id: str
    notizen: Optional[str] = Field(None, max_length=500)
    at: Optional[datetime] = None
