"""
Send-time heatmap package.
"""

from .service import (
    SendTimeAnalysis,
    SendTimeHeatmapService,
    format_hour,
    send_time_heatmap_service,
)

__all__ = [
    "SendTimeAnalysis",
    "SendTimeHeatmapService",
    "format_hour",
    "send_time_heatmap_service",
]
