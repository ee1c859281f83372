"""HTTP layer for the Adaptive LLM SDK.

This module provides the httpx-based transport that posts chat-completions
requests and reads JSON or server-sent event responses.
"""

from .transport import AdaptiveTransport, EventStreamResponse, JsonResponse, combine_headers

__all__ = ["AdaptiveTransport", "EventStreamResponse", "JsonResponse", "combine_headers"]
