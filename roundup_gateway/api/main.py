"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from roundup_gateway.api.dependencies import get_request_id
from roundup_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from roundup_gateway.api.v1 import goals, portfolio, projections, roundups
from roundup_gateway.domain.exceptions import DomainException
from roundup_gateway.infrastructure.observability.logging import setup_logging
from roundup_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Round-Up Gateway",
        description="Spare-change round-ups and investment growth projections",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Domain errors that escape an endpoint are client input problems
    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        request_id = get_request_id(request)
        logging.warning(
            f"Rejected request: {exc}",
            extra={"request_id": request_id, "error": type(exc).__name__},
        )
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "error": type(exc).__name__},
        )

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "service": settings.service_name,
            "round_up_unit": str(settings.round_up_unit),
            "default_risk_profile": settings.default_risk_profile,
        }

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(roundups.router, prefix="/v1", tags=["roundups"])
    app.include_router(projections.router, prefix="/v1", tags=["projections"])
    app.include_router(goals.router, prefix="/v1", tags=["goals"])
    app.include_router(portfolio.router, prefix="/v1", tags=["portfolio"])

    return app


app = create_app()
