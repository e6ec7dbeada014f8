import logging
import time

logger = logging.getLogger(__name__)


async def add_cache_headers(request, call_next):
    """HTTP cache headers and telemetry middleware."""
    tracer = request.app.state.tracer
    metrics = request.app.state.metrics
    path = request.url.path

    # Uploaded product images never change under the same name
    if path.startswith("/uploads/"):
        response = await call_next(request)
        if response.status_code == 200:
            response.headers["Cache-Control"] = "public, max-age=86400"
        return response

    if not path.startswith("/api/"):
        return await call_next(request)

    with tracer.start_as_current_span("http_request") as span:
        span.set_attribute("http.method", request.method)
        span.set_attribute("http.path", path)

        start_time = time.time()
        response = await call_next(request)
        duration = time.time() - start_time

        span.set_attribute("http.status_code", response.status_code)
        span.set_attribute("http.response_time_seconds", duration)

        if response.status_code >= 400:
            span.set_attribute("http.error", True)
            metrics.http_errors.add(1, {"path": path, "status": str(response.status_code)})

        if duration > 1.0:
            logger.warning(f"Slow API request: {request.method} {path} took {duration:.2f}s")

        # Resolved URLs depend on deployment config, keep clients from pinning them
        if path.startswith("/api/products"):
            response.headers["Cache-Control"] = "no-cache"

    return response
