# ================================
# MAIN APPLICATION (main.py)
# ================================

from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from app.config import settings
from app.core.exceptions import AppException
from app.core.middleware import (
    AuditMiddleware,
    NoStoreMiddleware,
    RequestContextMiddleware,
    SecurityHeadersMiddleware
)
from app.api import API_DESCRIPTION, API_TITLE, API_VERSION
from app.api.v1 import v1_router
from app.schemas.booking import TRIAL_DURATION_DAYS
from app.utils.default_catalogue import DEFAULT_CATALOGUE

# ================================
# LOGGING CONFIGURATION
# ================================

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ================================
# APPLICATION LIFECYCLE
# ================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"{settings.APP_NAME} {settings.APP_VERSION} ready: "
        f"{len(DEFAULT_CATALOGUE.units)} Mietfächer, {len(DEFAULT_CATALOGUE.addons)} add-ons, "
        f"Probemonat {TRIAL_DURATION_DAYS} Tage"
    )
    yield
    logger.info(f"{settings.APP_NAME} stopped")

app = FastAPI(
    title=API_TITLE,
    version=API_VERSION,
    description=API_DESCRIPTION,
    # Docs nur im Debug-Modus
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan
)

# ================================
# MIDDLEWARE CONFIGURATION
# ================================

# Reihenfolge: zuletzt hinzugefügt = äußerste Schicht
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(NoStoreMiddleware, path_prefix="/api/")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID", "X-Process-Time"]
)
app.add_middleware(AuditMiddleware)
app.add_middleware(RequestContextMiddleware)

# ================================
# EXCEPTION HANDLERS
# ================================

def error_response(request: Request, status_code: int, detail, error_code: Optional[str] = None) -> JSONResponse:
    """JSON error body shared by all handlers"""
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "error_code": error_code,
            "request_id": getattr(request.state, "request_id", None)
        }
    )

@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    logger.info(f"{exc.error_code or 'APP_ERROR'} on {request.url.path}: {exc.detail}")
    return error_response(request, exc.status_code, exc.detail, exc.error_code)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed selections, bookings or trial windows"""
    return error_response(request, 422, jsonable_encoder(exc.errors()), "REQUEST_VALIDATION_ERROR")

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return error_response(request, exc.status_code, exc.detail)

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    detail = str(exc) if settings.DEBUG else "Internal server error"
    return error_response(request, 500, detail, "INTERNAL_ERROR")

# ================================
# ROUTES
# ================================

@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "catalogue_units": len(DEFAULT_CATALOGUE.units)
    }

app.include_router(v1_router, prefix="/api")

@app.get("/", tags=["Root"])
async def root():
    """Service overview with the v1 entry points"""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs_url": "/docs" if settings.DEBUG else None,
        "health_url": "/health",
        "available_endpoints": {
            "pricing": "/api/v1/pricing",
            "bookings": "/api/v1/bookings",
            "trials": "/api/v1/trials",
            "package_tracking": "/api/v1/package-tracking"
        }
    }

# ================================
# DEVELOPMENT SERVER
# ================================

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else settings.LOG_LEVEL.lower()
    )
