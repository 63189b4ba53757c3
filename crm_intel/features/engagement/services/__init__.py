"""
Services built on top of the engagement pipeline.
"""

from .export_service import ContactExportService, contact_export_service
from .report_service import EngagementReportService, engagement_report_service

__all__ = [
    "ContactExportService",
    "EngagementReportService",
    "contact_export_service",
    "engagement_report_service",
]
