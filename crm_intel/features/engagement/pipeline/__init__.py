"""
Pipeline components for engagement intelligence.

Each subpackage is a stateless batch computation over a snapshot of
cached platform entities; none of them performs I/O.
"""

__all__ = ["benchmarks", "contact_scoring", "heatmap", "list_health", "recency"]
