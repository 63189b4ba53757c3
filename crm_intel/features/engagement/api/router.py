"""
Engagement analytics routes.

Thin handlers: each one converts the posted snapshot into domain objects,
calls one pipeline service and returns its plain result. Fetching the
snapshot from storage is the caller's job.
"""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import Response

from crm_intel.config import settings
from crm_intel.features.engagement.api.schemas import (
    ActivityScoringRequest,
    CampaignBenchmarkRequest,
    ContactsRequest,
    DashboardRequest,
    ListHealthRequest,
    ScoredContactsRequest,
    TimeOfDayRequest,
)
from crm_intel.features.engagement.pipeline.benchmarks import campaign_benchmark_service
from crm_intel.features.engagement.pipeline.contact_scoring import (
    ScoringModel,
    activity_scoring_service,
    contact_scoring_service,
    score_contacts,
)
from crm_intel.features.engagement.pipeline.heatmap import send_time_heatmap_service
from crm_intel.features.engagement.pipeline.list_health import list_health_service
from crm_intel.features.engagement.pipeline.recency import round_half_up
from crm_intel.features.engagement.services import (
    contact_export_service,
    engagement_report_service,
)
from crm_intel.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/analytics", tags=["engagement-analytics"])


def _unprocessable(exc: ValueError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"message": str(exc), "code": "INVALID_PARAMETER"},
    )


@router.post("/contact-scoring")
async def contact_scoring_overview(body: ContactsRequest) -> dict:
    """Tier distribution, average score and top contacts."""
    overview = contact_scoring_service.scoring_overview(
        body.domain_contacts(), top_limit=settings.TOP_CONTACTS_LIMIT
    )
    return asdict(overview)


@router.post("/scored-contacts")
async def scored_contacts(
    body: ScoredContactsRequest,
    limit: int | None = Query(None, ge=1),
    model: ScoringModel = ScoringModel.PROFILE,
) -> dict:
    """Every contact scored with the chosen model, in input order."""
    scored = score_contacts(
        body.domain_contacts(),
        [e.to_domain() for e in body.events],
        model=model,
        limit=limit,
    )
    return {"model": model.value, "contacts": [asdict(c) for c in scored], "total": len(scored)}


@router.post("/contacts")
async def search_contacts(
    body: ContactsRequest,
    search: str = "",
    tier: str | None = None,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
) -> dict:
    """Paginated scored contacts, filtered by email search and tier."""
    try:
        result = contact_scoring_service.search_contacts(
            body.domain_contacts(),
            search=search,
            tier=tier or None,
            page=page,
            limit=settings.get_page_size(limit),
        )
    except ValueError as exc:
        raise _unprocessable(exc) from exc

    payload = asdict(result)
    contacts = payload.pop("contacts")
    return {"contacts": contacts, "pagination": payload}


@router.post("/contacts/export")
async def export_contacts(
    body: ContactsRequest, search: str = "", tier: str | None = None
) -> Response:
    try:
        csv_text = contact_export_service.export_scored_contacts_csv(
            body.domain_contacts(), search=search, tier=tier or None
        )
    except ValueError as exc:
        raise _unprocessable(exc) from exc

    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="scored_contacts.csv"'},
    )


@router.post("/activity-scoring")
async def activity_scoring(body: ActivityScoringRequest, limit: int = Query(20, ge=1)) -> dict:
    """Event-based scoring model: five tiers from counted opens and clicks."""
    scored = activity_scoring_service.score_contacts(
        [c.to_domain() for c in body.contacts],
        [e.to_domain() for e in body.events],
    )
    total = len(scored)
    avg_score = round_half_up(sum(c.score for c in scored) / total) if total > 0 else 0
    top = sorted(scored, key=lambda c: c.score, reverse=True)[:limit]
    return {
        "total_contacts": total,
        "avg_score": avg_score,
        "tiers": activity_scoring_service.tier_distribution(scored),
        "top_contacts": [
            {"rank": index + 1, **asdict(contact)} for index, contact in enumerate(top)
        ],
    }


@router.post("/list-health")
async def list_health(body: ListHealthRequest) -> dict:
    results = list_health_service.score_lists(
        [item.to_domain() for item in body.lists],
        [c.to_domain() for c in body.contacts],
    )
    return {"lists": [asdict(item) for item in results]}


@router.post("/campaign-benchmarks")
async def campaign_benchmarks(body: CampaignBenchmarkRequest) -> dict:
    result = campaign_benchmark_service.benchmark(
        [c.to_domain() for c in body.campaigns],
        performer_count=settings.BENCHMARK_PERFORMER_COUNT,
    )
    return asdict(result)


@router.post("/time-of-day")
async def time_of_day(
    body: TimeOfDayRequest, days_back: int | None = Query(None, ge=0)
) -> dict:
    """Engagement heatmap plus the best day/hour to send."""
    lookback = settings.HEATMAP_LOOKBACK_DAYS if days_back is None else days_back
    analysis = send_time_heatmap_service.analyze(
        [e.to_domain() for e in body.events], lookback_days=lookback
    )
    return analysis.to_dict()


@router.post("/dashboard")
async def dashboard(body: DashboardRequest, days_back: int | None = Query(None, ge=0)) -> dict:
    """Every analytics section at once; a failing section does not sink the others."""
    return await engagement_report_service.build_dashboard(
        body.to_snapshot(), lookback_days=days_back
    )
