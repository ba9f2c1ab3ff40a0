"""
POS API main application.
Entry point for the FastAPI order server.
"""

from fastapi import FastAPI

from shared.config.logging import SERVICE_NAME
from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware
from pos_api.core import configure_cors, lifespan, register_exception_handlers
from pos_api.routers import orders_router


# Create FastAPI application
app = FastAPI(
    title="Restaurant POS API",
    description="Order transaction processing for the restaurant point of sale",
    version="0.1.0",
    lifespan=lifespan,
)

configure_cors(app)
app.add_middleware(CorrelationIdMiddleware)
register_exception_handlers(app)


# =============================================================================
# Health Check
# =============================================================================


@app.get("/api/health")
def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "environment": settings.environment,
    }


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(orders_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "pos_api.main:app",
        host="0.0.0.0",
        port=settings.api_port,
        reload=True,
    )
