# ================================
# BASE SCHEMAS (schemas/base.py)
# ================================

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class BaseSchema(BaseModel):
    """Base Schema mit gemeinsamer Konfiguration"""
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True,
    )

class FrozenSchema(BaseSchema):
    """Unveränderliche Werte (Katalog, Berechnungsergebnisse, Snapshots)"""
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        frozen=True,
    )

# ================================
# ERROR RESPONSE SCHEMAS (schemas/errors.py)
# ================================

class ErrorResponse(BaseSchema):
    """Standard Error Response Schema"""
    detail: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Application-specific error code")
    request_id: Optional[str] = Field(None, description="Request ID for log correlation")

