"""
Engagement intelligence feature package.

Keeps every layer of the analytics engine co-located (domain models,
scoring pipeline, report services and the API router): contact scores,
list health, campaign benchmarks and send-time heatmaps derived from the
cached email-platform snapshot.
"""

# Re-export the primary building blocks for easy access.
from .api.router import router as engagement_router  # noqa: F401
from .domain.models import (  # noqa: F401
    ActivityEvent,
    Campaign,
    CampaignStats,
    Contact,
    ContactList,
    EngagementSnapshot,
)
from .pipeline.benchmarks import campaign_benchmark_service  # noqa: F401
from .pipeline.contact_scoring import contact_scoring_service  # noqa: F401
from .pipeline.heatmap import send_time_heatmap_service  # noqa: F401
from .pipeline.list_health import list_health_service  # noqa: F401
from .services.report_service import engagement_report_service  # noqa: F401
