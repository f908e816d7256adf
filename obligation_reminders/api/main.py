"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from obligation_reminders.api.middleware import RequestIDMiddleware, MetricsMiddleware
from obligation_reminders.api.v1 import sweep, notifications, upcoming
from obligation_reminders.domain.exceptions import ConfigurationError
from obligation_reminders.infrastructure.observability.logging import setup_logging
from obligation_reminders.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Obligation Reminders",
        description="Due-date reminders for cards, fixed payments, installments and loans",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Missing credentials abort the request before any work is done
    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        logging.error(f"Configuration error: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Server misconfigured"})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(sweep.router, prefix="/v1", tags=["reminders"])
    app.include_router(notifications.router, prefix="/v1", tags=["notifications"])
    app.include_router(upcoming.router, prefix="/v1", tags=["obligations"])

    return app


app = create_app()
