"""Provider factory for the Adaptive LLM SDK."""

from typing import Optional

import httpx

from ..config.constants import CHAT_PROVIDER_ID
from ..config.settings import ProviderSettings
from ..errors import NoSuchModelError
from ..http.transport import AdaptiveTransport
from ..providers.adaptive.adapter import AdaptiveChatConfig, AdaptiveChatModel


class AdaptiveProvider:
    """
    Entry point for Adaptive models.

    The backend chooses the upstream model per request, so chat models are
    created without a model id. Calling the provider is shorthand for
    ``chat()``.
    """

    def __init__(
        self,
        settings: Optional[ProviderSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the provider.

        Args:
            settings: Provider settings (defaults read from the environment)
            http_client: Optional preconfigured httpx client, e.g. for proxies
                or tests
        """
        self.settings = settings or ProviderSettings()
        self.transport = AdaptiveTransport(timeout=self.settings.timeout, client=http_client)

    def __call__(self) -> AdaptiveChatModel:
        return self.chat()

    def _create_chat_model(self) -> AdaptiveChatModel:
        return AdaptiveChatModel(
            "",
            AdaptiveChatConfig(
                provider=CHAT_PROVIDER_ID,
                base_url=self.settings.base_url,
                headers=self.settings.build_headers,
                transport=self.transport,
                system_message_mode=self.settings.system_message_mode,
            ),
        )

    def chat(self) -> AdaptiveChatModel:
        """Create a chat model with adaptive provider selection."""
        return self._create_chat_model()

    def language_model(self) -> AdaptiveChatModel:
        """Create a model for text generation with adaptive provider selection."""
        return self._create_chat_model()

    def text_embedding_model(self, model_id: str):
        """Text embedding is not supported by the adaptive provider."""
        raise NoSuchModelError(model_id=model_id, model_type="textEmbeddingModel")

    def image_model(self, model_id: str):
        """Image generation is not supported by the adaptive provider."""
        raise NoSuchModelError(model_id=model_id, model_type="imageModel")

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.transport.aclose()


def create_adaptive(
    settings: Optional[ProviderSettings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> AdaptiveProvider:
    """Create an Adaptive provider instance."""
    return AdaptiveProvider(settings=settings, http_client=http_client)
