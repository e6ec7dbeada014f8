"""Health check routes."""

import logging
import time

from fastapi import APIRouter
from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

router = APIRouter()

WEB_START_TIME = time.time()


class DBHealthTracker:
    def __init__(self, max_failure_duration: float = 300):
        self.last_failure_time = None
        self.failure_count = 0
        self.max_failure_duration = max_failure_duration

    def record_failure(self):
        current_time = time.time()
        if self.last_failure_time is None:
            self.last_failure_time = current_time
        self.failure_count += 1

    def record_success(self):
        self.last_failure_time = None
        self.failure_count = 0

    def is_failure_persistent(self) -> bool:
        if self.last_failure_time is None:
            return False
        return (time.time() - self.last_failure_time) > self.max_failure_duration


db_health_tracker = DBHealthTracker()


def _no_store(status_code: int, payload: dict) -> JSONResponse:
    resp = JSONResponse(status_code=status_code, content=payload)
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.get("/healthz")
async def healthz():
    return {"status": "ok"}


@router.get("/health")
async def health(request: Request):
    tracer = request.app.state.tracer
    uptime = round(time.time() - WEB_START_TIME, 1)
    with tracer.start_as_current_span("health_check") as span:
        try:
            if not hasattr(request.app.state, "db"):
                return _no_store(503, {"status": "starting", "uptime_seconds": uptime})

            db_start = time.time()
            request.app.state.db.ping()
            db_duration = time.time() - db_start

            db_health_tracker.record_success()
            span.set_attribute("health.database_ok", True)
            span.set_attribute("health.database_duration_seconds", db_duration)
            span.set_attribute("health.status", "healthy")
            return _no_store(200, {"status": "healthy", "database": "ok", "uptime_seconds": uptime})
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            db_health_tracker.record_failure()
            span.set_attribute("health.database_ok", False)
            span.set_attribute("health.error", str(e))

            if db_health_tracker.is_failure_persistent():
                span.set_attribute("health.status", "unhealthy")
                return _no_store(
                    503,
                    {"status": "unhealthy", "database": "error", "detail": str(e), "uptime_seconds": uptime},
                )

            # Tolerate short blips before failing the probe
            span.set_attribute("health.status", "degraded")
            return _no_store(200, {"status": "degraded", "database": "error", "uptime_seconds": uptime})
