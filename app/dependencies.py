# ================================
# DEPENDENCIES (dependencies.py)
# ================================

from fastapi import Request
from app.config import settings
from app.schemas.catalogue import Catalogue
from app.utils.audit import AuditLogger
from app.utils.default_catalogue import DEFAULT_CATALOGUE

# ================================
# BASIC DEPENDENCIES
# ================================

def get_catalogue() -> Catalogue:
    """Dependency für den Katalog (in Tests per dependency_overrides austauschbar)"""
    return DEFAULT_CATALOGUE

def get_settings():
    """Dependency für die Konfiguration"""
    return settings

def get_audit_logger() -> AuditLogger:
    return AuditLogger()

def get_request_id(request: Request) -> str:
    """Dependency für Request-ID"""
    return getattr(request.state, 'request_id', 'unknown')
