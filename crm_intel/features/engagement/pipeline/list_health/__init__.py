"""
List health package.

Grades each cached list on size, blacklist rate and member recency.
"""

from .service import ListHealth, ListHealthService, list_health_service

__all__ = ["ListHealth", "ListHealthService", "list_health_service"]
