"""Observability layer.

This layer handles structured logging of requests, token usage and
streaming metrics for provider adapters.
"""

from .logging import ProviderLogger, RequestContext

__all__ = [
    "ProviderLogger",
    "RequestContext",
]
