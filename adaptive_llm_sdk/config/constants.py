"""
Adaptive provider constants.

Central location for endpoint defaults and the environment variables the
configuration layer reads.
"""

# Provider identity
PROVIDER_NAME = "adaptive"
CHAT_PROVIDER_ID = "adaptive.chat"

# Hosted endpoint used when neither settings nor environment override it
DEFAULT_BASE_URL = "https://backend.mangoplant-a7a21605.swedencentral.azurecontainerapps.io/v1"
CHAT_COMPLETIONS_PATH = "/chat/completions"

# Environment variables
API_KEY_ENV_VAR = "ADAPTIVE_API_KEY"
BASE_URL_ENV_VAR = "ADAPTIVE_BASE_URL"
TIMEOUT_ENV_VAR = "ADAPTIVE_TIMEOUT"

# Request timeout in seconds
DEFAULT_TIMEOUT = 60.0

# SSE sentinel terminating a stream
STREAM_DONE_SENTINEL = "[DONE]"

# HTTP status codes worth retrying by the caller's transport policy
RETRYABLE_STATUS_CODES = frozenset({408, 409, 429, 500, 502, 503, 504})
