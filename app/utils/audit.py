# ================================
# AUDIT LOGGING UTILITY (utils/audit.py)
# ================================

from typing import Optional, Dict, Any
import json
import logging

from app.schemas.pricing import PriceBreakdown

logger = logging.getLogger(__name__)

class AuditLogger:
    """
    Audit logging for price calculations and status changes.

    Entries go to the application logger as single structured lines
    (`AUDIT: <action> | ...`). Sensitive keys are redacted.
    """

    SENSITIVE_KEYS = {
        'password', 'token', 'access_token', 'refresh_token', 'api_key',
        'secret', 'iban', 'credit_card'
    }

    def log_price_calculation(
        self,
        breakdown: PriceBreakdown,
        source: str,
        user_id: Optional[str] = None,
        contract_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Log an authoritative price calculation.

        Args:
            breakdown: Result of the calculation
            source: Where the calculation was triggered ('booking', 'quote', 'validation')
            user_id: Vendor the price was calculated for (optional)
            contract_id: Related contract (optional)

        Returns:
            The logged details
        """
        details = {
            "source": source,
            "contract_id": contract_id,
            "subtotal": breakdown.subtotal,
            "discount_rate": breakdown.discount_rate,
            "monthly_total": breakdown.monthly_total,
            "provision_rate": breakdown.provision_rate,
        }
        self._log_to_application_logger("PRICE_CALCULATED", user_id, details)
        return details

    def log_status_change(
        self,
        resource_type: str,
        resource_id: str,
        old_status: str,
        new_status: str,
        user_id: Optional[str] = None,
        additional_context: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Log a status transition of a booking or package"""
        details = {
            "resource_type": resource_type,
            "resource_id": resource_id,
            "old_status": old_status,
            "new_status": new_status,
            **(additional_context or {})
        }
        details = self._sanitize_sensitive_data(details)
        self._log_to_application_logger(f"{resource_type.upper()}_STATUS_CHANGED", user_id, details)
        return details

    def _sanitize_sensitive_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Mask sensitive values, recursing into nested dicts"""
        if not data:
            return {}

        sanitized = {}
        for key, value in data.items():
            if self._is_sensitive_key(str(key)):
                sanitized[key] = "***REDACTED***"
            elif isinstance(value, dict):
                sanitized[key] = self._sanitize_sensitive_data(value)
            else:
                sanitized[key] = value
        return sanitized

    def _is_sensitive_key(self, key: str) -> bool:
        key_lower = key.lower()
        return any(sensitive in key_lower for sensitive in self.SENSITIVE_KEYS)

    def _log_to_application_logger(
        self,
        action: str,
        user_id: Optional[str],
        details: Dict[str, Any]
    ):
        log_message = f"AUDIT: {action}"
        if user_id:
            log_message += f" | User: {user_id}"

        safe_details = {k: v for k, v in details.items() if v is not None and not self._is_sensitive_key(k)}
        if safe_details:
            log_message += f" | Details: {json.dumps(safe_details, default=str)}"

        logger.info(log_message)

