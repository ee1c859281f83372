"""
Base Language Model Interface

This module defines the abstract base class for provider chat models.
All provider implementations must inherit from this class and implement
the required methods to ensure consistent behavior across providers.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Pattern

from ..errors import ProviderError
from ..models.generation import GenerateResult, StreamResult
from ..models.prompt import CallOptions


class LanguageModel(ABC):
    """
    Abstract base class for provider chat models.

    The model is responsible for:
    - Translating canonical call options into the provider's wire request
    - Making the API call through its transport
    - Normalizing responses and stream chunks into canonical results and events
    - Mapping transport and backend errors to ProviderError

    Models should NOT contain:
    - Provider selection policy
    - Retry logic (belongs to the transport's caller)
    """

    specification_version = "v2"

    @property
    @abstractmethod
    def provider(self) -> str:
        """Provider identifier, e.g. ``"adaptive.chat"``."""

    @property
    @abstractmethod
    def model_id(self) -> str:
        """Model identifier; may be empty when the backend selects the model."""

    @property
    def supported_urls(self) -> Dict[str, List[Pattern[str]]]:
        """Media types the backend can fetch by URL, keyed to accepted URL patterns."""
        return {}

    @abstractmethod
    async def generate(self, options: CallOptions) -> GenerateResult:
        """
        Generate a completion in one shot.

        Args:
            options: Canonical call options

        Returns:
            GenerateResult with content, finish reason, usage and provider metadata

        Raises:
            UnsupportedFunctionalityError: Before any request is sent, when the
                call asks for something the wire cannot express
            InvalidResponseDataError: When the response does not match the schema
            ProviderError: For transport and backend errors
        """

    @abstractmethod
    async def stream(self, options: CallOptions) -> StreamResult:
        """
        Generate a completion as a stream of canonical events.

        Malformed chunks and backend-reported errors during the stream are
        delivered as error events rather than raised.

        Args:
            options: Canonical call options

        Returns:
            StreamResult whose ``stream`` yields GenerationEvents

        Raises:
            UnsupportedFunctionalityError: Before any request is sent
            ProviderError: When the request itself fails
        """


__all__ = ["LanguageModel", "ProviderError"]
