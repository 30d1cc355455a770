# ================================
# PACKAGE TRACKING SERVICE (services/package_tracking_service.py)
# ================================

from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, Optional
import logging

from app.core.exceptions import InvalidStatusTransitionError
from app.schemas.package_tracking import PackageTrackingEntry, PackageTrackingStatus, PackageType
from app.schemas.pricing import Zusatzleistungen

logger = logging.getLogger(__name__)

class PackageTrackingService:
    """Service for tracking parcels of the Lager- und Versandservice"""

    # Valid status transitions
    VALID_TRANSITIONS = {
        PackageTrackingStatus.ERWARTET: [PackageTrackingStatus.ANGEKOMMEN],
        PackageTrackingStatus.ANGEKOMMEN: [PackageTrackingStatus.EINGELAGERT, PackageTrackingStatus.VERSANDT],
        PackageTrackingStatus.EINGELAGERT: [PackageTrackingStatus.VERSANDT],
        PackageTrackingStatus.VERSANDT: [PackageTrackingStatus.ZUGESTELLT],
        PackageTrackingStatus.ZUGESTELLT: []  # Final
    }

    # Datumsfeld, das beim Erreichen des Status gesetzt wird
    STATUS_DATE_FIELDS = {
        PackageTrackingStatus.ANGEKOMMEN: "ankunft_datum",
        PackageTrackingStatus.EINGELAGERT: "einlagerung_datum",
        PackageTrackingStatus.VERSANDT: "versand_datum",
        PackageTrackingStatus.ZUGESTELLT: "zustellung_datum",
    }

    @staticmethod
    def create_entry(
        vertrag_id: str,
        package_typ: PackageType,
        at: datetime,
        tracking_nummer: Optional[str] = None
    ) -> PackageTrackingEntry:
        """New entry in status 'erwartet'"""
        return PackageTrackingEntry(
            vertrag_id=vertrag_id,
            package_typ=package_typ,
            created_at=at,
            updated_at=at,
            tracking_nummer=tracking_nummer
        )

    @staticmethod
    def entries_for_zusatzleistungen(
        vertrag_id: str,
        zusatzleistungen: Zusatzleistungen,
        at: datetime
    ) -> List[PackageTrackingEntry]:
        """One expected package per booked Zusatzleistung"""
        entries = []
        if zusatzleistungen.lagerservice:
            entries.append(PackageTrackingService.create_entry(vertrag_id, PackageType.LAGERSERVICE, at))
        if zusatzleistungen.versandservice:
            entries.append(PackageTrackingService.create_entry(vertrag_id, PackageType.VERSANDSERVICE, at))
        return entries

    @staticmethod
    def get_valid_transitions(status: PackageTrackingStatus) -> List[PackageTrackingStatus]:
        return PackageTrackingService.VALID_TRANSITIONS.get(status, [])

    @staticmethod
    def update_status(
        entry: PackageTrackingEntry,
        status: PackageTrackingStatus,
        admin_id: str,
        at: datetime,
        notizen: Optional[str] = None
    ) -> PackageTrackingEntry:
        """Apply a validated status change and stamp the matching date field"""
        if status not in PackageTrackingService.get_valid_transitions(entry.status):
            raise InvalidStatusTransitionError(entry.status.value, status.value)

        update = {
            "status": status,
            "bestaetigt_von": admin_id,
            "updated_at": at,
            PackageTrackingService.STATUS_DATE_FIELDS[status]: at,
        }
        if notizen:
            update["notizen"] = notizen

        logger.info(
            f"Package {entry.package_typ.value} for Vertrag {entry.vertrag_id}: "
            f"{entry.status.value} -> {status.value} (by {admin_id})"
        )
        return entry.model_copy(update=update)

    @staticmethod
    def count_by_status(entries: Iterable[PackageTrackingEntry]) -> Dict[str, int]:
        counter = Counter(entry.status for entry in entries)
        return {status.value: counter.get(status, 0) for status in PackageTrackingStatus}
