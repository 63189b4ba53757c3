"""
FastAPI entry point for the CRM engagement analytics service.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from crm_intel.config import settings
from crm_intel.features.engagement import engagement_router
from crm_intel.infrastructure.observability.logging import get_logger, setup_logging
from crm_intel.middleware import RequestContextMiddleware
from crm_intel.routes import health

# Setup logging before creating the app
setup_logging(log_level=settings.effective_log_level())
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """The engine keeps no connections; startup and shutdown only log."""
    logger.info(
        "Application starting",
        environment=settings.environment,
        debug=settings.debug,
        heatmap_lookback_days=settings.HEATMAP_LOOKBACK_DAYS,
    )
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="CRM Engagement Intelligence",
    description="Contact scores, list health, campaign benchmarks and send-time heatmaps",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(RequestContextMiddleware)

# Include routers
app.include_router(health.router)
app.include_router(engagement_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
