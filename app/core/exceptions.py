# ================================
# CUSTOM EXCEPTIONS (core/exceptions.py)
# ================================

class AppException(Exception):
    """Base Exception für Application-spezifische Fehler"""

    def __init__(self, detail: str, status_code: int = 400, error_code: str = None):
        self.detail = detail
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(detail)

class ValidationError(AppException):
    """Validation-spezifische Fehler"""

    def __init__(self, detail: str, error_code: str = "VALIDATION_ERROR"):
        super().__init__(detail, 422, error_code)

class InvalidStatusTransitionError(AppException):
    """Ungültiger Status-Übergang (Buchung oder Package Tracking)"""

    def __init__(self, from_status: str, to_status: str, error_code: str = "INVALID_STATUS_TRANSITION"):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Ungültiger Status-Übergang von {from_status} zu {to_status}",
            409,
            error_code
        )
