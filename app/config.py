# ================================
# CONFIGURATION (config.py)
# ================================

from decimal import Decimal
from pydantic_settings import BaseSettings

class settings(BaseSettings):
    # App Settings
    APP_NAME: str = "housnkuh Pricing API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Zusatzleistungen (flat monthly fees, EUR)
    LAGERSERVICE_PRICE: Decimal = Decimal("20")
    VERSANDSERVICE_PRICE: Decimal = Decimal("5")

    # Trial Settings
    TRIAL_WARNING_DAYS: int = 3  # Banner ab 3 Tagen Restlaufzeit
    TRIAL_URGENT_DAYS: int = 1

    # Price validation (client total vs. backend total)
    PRICE_TOLERANCE: Decimal = Decimal("0.01")

    class Config:
        env_file = ".env"
        extra = "ignore"  # Ignore extra fields from .env

settings = settings()
