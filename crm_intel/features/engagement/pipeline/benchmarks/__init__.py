"""
Campaign benchmarking package.
"""

from .service import CampaignBenchmarks, CampaignBenchmarkService, campaign_benchmark_service

__all__ = ["CampaignBenchmarkService", "CampaignBenchmarks", "campaign_benchmark_service"]
