"""
Error mapping utilities for provider adapters.

This module converts transport exceptions and failed HTTP responses into the
SDK's ``ProviderError`` hierarchy. Nothing here retries; retry decisions are
left to the caller using ``is_retryable`` and ``retry_after``.
"""

import json
from typing import Any, Dict, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from ..config.constants import RETRYABLE_STATUS_CODES
from ..errors import APICallError, ProviderError


class ErrorDetail(BaseModel):
    """The ``error`` object of a backend error payload."""
    model_config = ConfigDict(extra="ignore")

    message: str
    type: Optional[str] = None
    param: Any = None
    code: Optional[Union[str, int]] = None


class ErrorPayload(BaseModel):
    """Error body returned by the backend: ``{"error": {...}}``."""
    model_config = ConfigDict(extra="ignore")

    error: ErrorDetail


class ErrorMapper:
    """Maps transport and HTTP errors to standardized ProviderError."""

    @staticmethod
    def is_retryable_status(status_code: Optional[int]) -> bool:
        """
        Determine if an HTTP status is worth retrying.

        Args:
            status_code: HTTP status code, if any

        Returns:
            bool: True for timeouts, conflicts, rate limits and server errors
        """
        if status_code is None:
            return False
        return status_code in RETRYABLE_STATUS_CODES or status_code >= 500

    @staticmethod
    def get_retry_after(headers: Optional[httpx.Headers]) -> Optional[float]:
        """
        Extract retry-after value from response headers if available.

        Args:
            headers: Response headers

        Returns:
            Optional[float]: Seconds to wait before retry, or None
        """
        if not headers:
            return None
        retry_after = headers.get("retry-after")
        if retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass
        retry_after_ms = headers.get("retry-after-ms")
        if retry_after_ms:
            try:
                return float(retry_after_ms) / 1000
            except ValueError:
                pass
        return None

    @staticmethod
    def parse_error_payload(body: str) -> Optional[ErrorPayload]:
        """Parse a backend error body, returning None when it does not match."""
        try:
            return ErrorPayload.model_validate(json.loads(body))
        except (json.JSONDecodeError, ValidationError, TypeError):
            return None

    @staticmethod
    def map_response_error(response: httpx.Response, body: str) -> APICallError:
        """
        Map a non-success HTTP response to APICallError.

        The message comes from the backend error payload when it parses, and
        from the HTTP reason phrase otherwise.

        Args:
            response: The failed response
            body: The already-read response body text

        Returns:
            APICallError with status and retry metadata
        """
        payload = ErrorMapper.parse_error_payload(body)
        if payload is not None:
            message = payload.error.message
        else:
            message = response.reason_phrase or f"HTTP {response.status_code}"

        error = APICallError(
            message=message,
            url=str(response.request.url) if response.request else "",
            status_code=response.status_code,
            response_body=body,
            data=payload,
            retry_after=ErrorMapper.get_retry_after(response.headers),
        )
        error.is_retryable = ErrorMapper.is_retryable_status(response.status_code)
        return error

    @staticmethod
    def map_transport_error(error: Exception) -> ProviderError:
        """
        Map a transport-level exception to ProviderError.

        SDK errors pass through unchanged.

        Args:
            error: The exception raised while talking to the backend

        Returns:
            ProviderError with appropriate metadata
        """
        if isinstance(error, ProviderError):
            return error

        if isinstance(error, httpx.TimeoutException):
            message = f"Adaptive API request timed out: {error}"
        elif isinstance(error, httpx.ConnectError):
            message = f"Adaptive API connection failed: {error}"
        else:
            message = f"Adaptive API error: {error}"

        provider_error = ProviderError(message=message)
        provider_error.is_retryable = isinstance(
            error, (httpx.TimeoutException, httpx.ConnectError)
        )
        provider_error.original_error = error
        return provider_error

    @staticmethod
    def get_error_classification(error: ProviderError) -> Dict[str, Any]:
        """
        Get error classification details for logging.

        Args:
            error: The ProviderError to classify

        Returns:
            Dict with error classification details
        """
        return {
            'provider': error.provider,
            'status_code': error.status_code,
            'is_retryable': error.is_retryable,
            'retry_after': error.retry_after,
            'error_type': type(error.original_error).__name__ if error.original_error else type(error).__name__,
            'category': ErrorMapper._categorize_error(error),
        }

    @staticmethod
    def _categorize_error(error: ProviderError) -> str:
        """Categorize error for logging."""
        if error.status_code:
            if error.status_code in (401, 403):
                return 'authentication'
            elif error.status_code == 429:
                return 'rate_limit'
            elif error.status_code >= 500:
                return 'server_error'
            elif error.status_code >= 400:
                return 'client_error'

        if isinstance(error.original_error, httpx.TimeoutException):
            return 'timeout'
        elif isinstance(error.original_error, httpx.ConnectError):
            return 'network'

        return 'unknown'
