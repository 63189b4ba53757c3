"""
Health check endpoints.
"""

from fastapi import APIRouter

from crm_intel.config import settings

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """Basic health check - always returns 200 if app is running."""
    return {"status": "ok", "service": "crm-engagement-intelligence"}


@router.get("/readyz")
async def readyz():
    """
    Readiness check. The engine has no backing services, so readiness only
    reports the analytics defaults it will apply.
    """
    return {
        "overall_ok": True,
        "environment": settings.environment,
        "defaults": {
            "heatmap_lookback_days": settings.HEATMAP_LOOKBACK_DAYS,
            "top_contacts_limit": settings.TOP_CONTACTS_LIMIT,
            "benchmark_performer_count": settings.BENCHMARK_PERFORMER_COUNT,
            "contacts_page_size": settings.CONTACTS_PAGE_SIZE,
        },
    }
