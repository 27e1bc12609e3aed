import time
import logging
from typing import Optional
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .application.ports.rate_limiter import RateLimiter
from .config import Settings, settings as default_settings
from .exceptions import create_error_response
from .infrastructure.rate_limit.memory_rate_limiter import InMemoryRateLimiter

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client sliding window on /api/ routes; static files and health are not counted."""

    def __init__(self, app: ASGIApp, config: Optional[Settings] = None, limiter: Optional[RateLimiter] = None):
        super().__init__(app)
        self.config = config or default_settings
        self.limiter = limiter or InMemoryRateLimiter()

    async def dispatch(self, request: Request, call_next):
        if not self.config.RATE_LIMIT_ENABLED or not request.url.path.startswith("/api/"):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        window = self.config.RATE_LIMIT_WINDOW_SEC
        if not self.limiter.allow(client_ip, self.config.RATE_LIMIT_MAX_REQUESTS, window):
            logger.warning(f"Rate limit exceeded for IP: {client_ip}")
            return JSONResponse(
                status_code=429,
                content=create_error_response(
                    "Too many requests", "Too many requests from this IP, please try again later."
                ),
                headers={"Retry-After": str(self.limiter.retry_after(client_ip, window))},
            )
        return await call_next(request)


class SecurityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; style-src 'self' 'unsafe-inline'; img-src 'self' data:"
        )

        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        client_host = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} from {client_host} -> {response.status_code} in {duration:.3f}s"
        )
        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, config: Optional[Settings] = None):
        super().__init__(app)
        self.config = config or default_settings

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(f"Unhandled error on {request.method} {request.url.path}: {e}", exc_info=True)
            message = f"Internal server error: {e}" if self.config.DEBUG else "Something went wrong"
            return JSONResponse(
                status_code=500,
                content=create_error_response("Internal server error", message),
            )


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, config: Optional[Settings] = None):
        super().__init__(app)
        self.config = config or default_settings

    async def dispatch(self, request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length is not None:
            try:
                size = int(content_length)
            except ValueError:
                return JSONResponse(status_code=400, content=create_error_response("Invalid Content-Length header"))
            if size > self.config.MAX_REQUEST_SIZE:
                return JSONResponse(status_code=413, content=create_error_response("Request entity too large"))
        return await call_next(request)
