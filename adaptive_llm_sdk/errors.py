"""
Exception hierarchy of the Adaptive LLM SDK.

Every exception raised to callers derives from ``ProviderError`` so a single
``except ProviderError`` covers transport failures, backend errors and
unsupported requests alike.
"""

from typing import Any, Optional


class ProviderError(Exception):
    """
    Base exception for provider-related errors.

    This should be raised for:
    - API transport errors
    - Backend-reported errors
    - Requests the provider cannot express on the wire

    Attributes:
        message: Error message
        provider: Provider name
        status_code: HTTP status code if applicable
        retry_after: Seconds to wait before retry if applicable
        is_retryable: Whether this error should be retried
        original_error: The original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        provider: str = "adaptive",
        status_code: Optional[int] = None,
        retry_after: Optional[float] = None
    ):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.status_code = status_code
        self.retry_after = retry_after
        self.is_retryable = False  # Default, set by the error mapper
        self.original_error: Optional[BaseException] = None


class APICallError(ProviderError):
    """The backend answered with a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        url: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        data: Any = None,
        retry_after: Optional[float] = None,
        provider: str = "adaptive",
    ):
        super().__init__(message, provider=provider, status_code=status_code, retry_after=retry_after)
        self.url = url
        self.response_body = response_body
        self.data = data


class InvalidResponseDataError(ProviderError):
    """A one-shot response did not match the expected schema."""

    def __init__(self, message: str, data: Any = None, provider: str = "adaptive"):
        super().__init__(message, provider=provider)
        self.data = data


class UnsupportedFunctionalityError(ProviderError):
    """The caller asked for something with no wire equivalent."""

    def __init__(self, functionality: str, provider: str = "adaptive"):
        super().__init__(f"'{functionality}' functionality not supported.", provider=provider)
        self.functionality = functionality


class NoSuchModelError(ProviderError):
    """The provider does not offer the requested model type."""

    def __init__(self, model_id: str, model_type: str, provider: str = "adaptive"):
        super().__init__(f"No such {model_type}: {model_id}", provider=provider)
        self.model_id = model_id
        self.model_type = model_type


class LoadAPIKeyError(ProviderError):
    """No API key could be resolved."""
