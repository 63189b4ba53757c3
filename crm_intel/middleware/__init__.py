"""
Middleware components for request processing.
"""

from crm_intel.middleware.request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
