"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from solvability_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from solvability_gateway.api.v1 import assessment, history, score
from solvability_gateway.infrastructure.observability.logging import setup_logging
from solvability_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Solvability Gateway",
        description="Tenant solvability scoring for rental applications",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers; history before assessment so /score/history is not read as an ID
    app.include_router(score.router, prefix="/v1", tags=["scoring"])
    app.include_router(history.router, prefix="/v1", tags=["history"])
    app.include_router(assessment.router, prefix="/v1", tags=["scoring"])

    return app


app = create_app()
