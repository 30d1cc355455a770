# ================================
# MIDDLEWARE (core/middleware.py)
# ================================

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import logging
import time
import uuid

logger = logging.getLogger(__name__)

# Pfade ohne Request-Logging
UNAUDITED_PATHS = {"/health", "/api/v1/health", "/", "/docs", "/redoc", "/openapi.json"}

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Request-ID (vom Client übernommen oder neu) und Verarbeitungszeit"""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        request.state.started = started

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{time.perf_counter() - started:.4f}"
        return response

class AuditMiddleware(BaseHTTPMiddleware):
    """Eine Logzeile pro API-Aufruf mit Status und Dauer"""

    async def dispatch(self, request: Request, call_next):
        if request.url.path in UNAUDITED_PATHS:
            return await call_next(request)

        response = await call_next(request)

        started = getattr(request.state, "started", None)
        duration_ms = (time.perf_counter() - started) * 1000 if started else None
        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            level,
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "client_ip": request.client.host if request.client else None
            }
        )
        return response

class NoStoreMiddleware(BaseHTTPMiddleware):
    """Preise und Status nie aus einem Cache ausliefern"""

    def __init__(self, app, path_prefix: str = "/api/"):
        super().__init__(app)
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith(self.path_prefix):
            response.headers["Cache-Control"] = "no-store"
        return response

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Standard Security Headers für JSON-Antworten"""

    HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "strict-origin-when-cross-origin",
    }

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.update(self.HEADERS)
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response
