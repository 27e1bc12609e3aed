from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
import time

from ..application.services.stats_service import StatsService
from ..config import settings
from ..database import ping
from ..exceptions import create_success_response
from .dependencies import get_stats_service

router = APIRouter(tags=["Dashboard"])


@router.get("/api/dashboard/stats")
def dashboard_stats(stats: StatsService = Depends(get_stats_service)):
    return create_success_response(stats.dashboard())


def _health(request: Request, extra: dict) -> JSONResponse:
    ok = ping(request.app.state.engine)
    body = {
        "status": "OK" if ok else "ERROR",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected" if ok else "unavailable",
    }
    body.update(extra)
    return JSONResponse(status_code=200 if ok else 503, content=body)


@router.get("/health")
def health_check(request: Request):
    return _health(request, {})


@router.get("/api/health")
def api_health_check(request: Request):
    started = getattr(request.app.state, "started_at", None)
    uptime = round(time.time() - started, 3) if started else 0
    return _health(request, {"uptime": uptime})


@router.get("/api/docs-index")
def docs_index(request: Request):
    """A plain listing of the API surface for the dashboard's help panel."""
    base = str(request.base_url).rstrip("/") + "/api"
    return {
        "title": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "baseUrl": base,
        "endpoints": {
            "patients": [
                "GET /api/patients?limit&offset&search",
                "GET /api/patients/stats",
                "GET /api/patients/{id}",
                "GET /api/patients/{id}/appointments",
                "POST /api/patients",
                "PUT /api/patients/{id}",
                "DELETE /api/patients/{id}",
            ],
            "doctors": [
                "GET /api/doctors?limit&offset&search",
                "GET /api/doctors/stats",
                "GET /api/doctors/{id}",
                "GET /api/doctors/{id}/appointments",
                "POST /api/doctors",
                "PUT /api/doctors/{id}",
                "DELETE /api/doctors/{id}",
            ],
            "appointments": [
                "GET /api/appointments?limit&offset&search&status",
                "GET /api/appointments/today",
                "GET /api/appointments/stats",
                "GET /api/appointments/{id}",
                "POST /api/appointments",
                "PUT /api/appointments/{id}",
                "PUT /api/appointments/{id}/cancel",
                "DELETE /api/appointments/{id}",
            ],
            "dashboard": ["GET /api/dashboard/stats", "GET /api/health"],
        },
        "rateLimits": {
            "api": f"{settings.RATE_LIMIT_MAX_REQUESTS} requests per {settings.RATE_LIMIT_WINDOW_SEC // 60} minutes",
        },
    }
