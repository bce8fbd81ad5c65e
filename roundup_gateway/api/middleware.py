"""FastAPI middleware for request tracing and metrics"""

import uuid
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from roundup_gateway.infrastructure.observability.logging import log_request
from roundup_gateway.infrastructure.observability.metrics import request_duration_histogram

MAX_REQUEST_ID_LENGTH = 128


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to each request, reusing the caller's X-Request-ID when present"""

    async def dispatch(self, request: Request, call_next):
        incoming = request.headers.get("X-Request-ID", "").strip()
        request_id = incoming if 0 < len(incoming) <= MAX_REQUEST_ID_LENGTH else str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


def _endpoint_label(request: Request) -> str:
    # Route template keeps label cardinality bounded; unmatched paths share one label
    route = request.scope.get("route")
    return getattr(route, "path", "unmatched")


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record latency per route and log each completed request"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        duration = time.time() - start_time
        endpoint = _endpoint_label(request)
        request_duration_histogram.labels(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code,
        ).observe(duration)
        log_request(
            getattr(request.state, "request_id", "unknown"),
            request.method,
            endpoint,
            response.status_code,
            duration * 1000,
        )

        return response
