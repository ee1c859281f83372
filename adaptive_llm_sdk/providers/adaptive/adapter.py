"""
Adaptive chat model.

Builds the request body from canonical call options, sends it through the
transport and turns the response (or event stream) into canonical results.
"""

import re
from dataclasses import dataclass
from typing import Any, AsyncGenerator, AsyncIterator, Callable, Dict, List, Pattern, Tuple

import httpx

from ..base import LanguageModel
from ..errors import ErrorMapper
from ...config.constants import CHAT_COMPLETIONS_PATH, PROVIDER_NAME
from ...config.settings import SystemMessageMode
from ...core.normalization.params import normalize_params, parse_provider_options
from ...http.transport import AdaptiveTransport, combine_headers
from ...models.events import GenerationEvent
from ...models.generation import CallWarning, GenerateResult, StreamResult
from ...models.prompt import CallOptions
from ...observability.logging import ProviderLogger
from .options import AdaptiveProviderOptions
from .parsers import parse_chat_response
from .payloads import build_chat_payload, build_stream_payload, convert_to_adaptive_messages
from .schemas import ParsedChunk, parse_chunk_data
from .streaming import StreamEventReducer, reduce_stream
from .tools import prepare_tools

logger = ProviderLogger("adaptive")


@dataclass
class AdaptiveChatConfig:
    """Everything a chat model needs from its provider."""
    provider: str
    base_url: str
    headers: Callable[[], Dict[str, str]]
    transport: AdaptiveTransport
    system_message_mode: SystemMessageMode = SystemMessageMode.SYSTEM


class AdaptiveChatModel(LanguageModel):
    """Chat model backed by the Adaptive chat-completions API."""

    def __init__(self, model_id: str, config: AdaptiveChatConfig):
        self._model_id = model_id
        self._config = config

    @property
    def provider(self) -> str:
        return self._config.provider

    @property
    def model_id(self) -> str:
        return self._model_id

    @property
    def supported_urls(self) -> Dict[str, List[Pattern[str]]]:
        return {"application/pdf": [re.compile(r"^https://.*$")]}

    @property
    def url(self) -> str:
        return f"{self._config.base_url}{CHAT_COMPLETIONS_PATH}"

    def get_args(self, options: CallOptions) -> Tuple[Dict[str, Any], List[CallWarning]]:
        """
        Build the wire request body for a call.

        Raises:
            UnsupportedFunctionalityError: When the prompt or tool choice cannot
                be expressed on the wire; no request has been sent at that point
        """
        provider_options = parse_provider_options(
            options.provider_options, AdaptiveProviderOptions, PROVIDER_NAME
        )
        params, warnings = normalize_params(options, provider_options)

        messages, message_warnings = convert_to_adaptive_messages(
            options.prompt, self._config.system_message_mode
        )
        warnings.extend(message_warnings)

        tools, tool_choice, tool_warnings = prepare_tools(options.tools, options.tool_choice)
        warnings.extend(tool_warnings)

        return build_chat_payload(messages, params, tools, tool_choice), warnings

    async def generate(self, options: CallOptions) -> GenerateResult:
        """Generate a completion in one shot."""
        body, warnings = self.get_args(options)

        with logger.track_request("generate", self._model_id) as request_info:
            logger.log_warnings(warnings, self._model_id, request_info.request_id)
            try:
                response = await self._config.transport.post_json(
                    self.url,
                    combine_headers(self._config.headers(), options.headers),
                    body,
                )
            except Exception as e:
                raise ErrorMapper.map_transport_error(e) from e

            result = parse_chat_response(response.value)
            logger.log_usage(result.usage, self._model_id, request_info.request_id)

            return result.model_copy(update={
                "request_body": body,
                "response": result.response.model_copy(update={"headers": response.headers}),
                "warnings": warnings,
            })

    async def stream(self, options: CallOptions) -> StreamResult:
        """Generate a completion as a stream of canonical events."""
        args, warnings = self.get_args(options)
        body = build_stream_payload(args)

        with logger.track_request("stream", self._model_id) as request_info:
            logger.log_warnings(warnings, self._model_id, request_info.request_id)
            try:
                response = await self._config.transport.post_event_stream(
                    self.url,
                    combine_headers(self._config.headers(), options.headers),
                    body,
                )
            except Exception as e:
                raise ErrorMapper.map_transport_error(e) from e

        reducer = StreamEventReducer(
            warnings=warnings,
            model_id=self._model_id,
            request_id=request_info.request_id,
        )
        return StreamResult(
            stream=self._event_stream(response.events, reducer),
            request_body=body,
            response_headers=response.headers,
        )

    async def _event_stream(
        self,
        data_events: AsyncIterator[str],
        reducer: StreamEventReducer,
    ) -> AsyncGenerator[GenerationEvent, None]:
        async def parsed_chunks() -> AsyncGenerator[ParsedChunk, None]:
            async for data in data_events:
                yield parse_chunk_data(data)

        try:
            async for event in reduce_stream(parsed_chunks(), reducer):
                yield event
        except httpx.HTTPError as e:
            error = ErrorMapper.map_transport_error(e)
            logger.error(
                "Stream transport failed",
                model=self._model_id,
                request_id=reducer.request_id,
                error=error,
            )
            raise error from e
