"""HTTP transport for the Adaptive API.

Posts JSON bodies and reads either a JSON response or a server-sent event
stream. Failed responses are mapped to ``APICallError``; no retries are made.
"""

import json
from dataclasses import dataclass
from typing import Any, AsyncGenerator, AsyncIterator, Dict, List, Optional

import httpx

from ..config.constants import DEFAULT_TIMEOUT, STREAM_DONE_SENTINEL
from ..providers.errors import ErrorMapper


@dataclass
class JsonResponse:
    headers: Dict[str, str]
    value: Any
    raw: str


@dataclass
class EventStreamResponse:
    headers: Dict[str, str]
    events: AsyncIterator[str]


def combine_headers(*header_sets: Optional[Dict[str, Optional[str]]]) -> Dict[str, str]:
    """Merge header dicts left to right, dropping None values."""
    combined: Dict[str, str] = {}
    for headers in header_sets:
        for key, value in (headers or {}).items():
            if value is not None:
                combined[key] = value
    return combined


class AdaptiveTransport:
    """Thin async HTTP client for JSON and SSE endpoints."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._timeout = timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy initialization of the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout, connect=10.0))
        return self._client

    async def post_json(
        self,
        url: str,
        headers: Dict[str, str],
        body: Dict[str, Any],
    ) -> JsonResponse:
        """POST ``body`` and decode the JSON response."""
        response = await self.client.post(url, json=body, headers=headers)
        raw = response.text
        if response.is_error:
            raise ErrorMapper.map_response_error(response, raw)
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            value = None
        return JsonResponse(headers=dict(response.headers), value=value, raw=raw)

    async def post_event_stream(
        self,
        url: str,
        headers: Dict[str, str],
        body: Dict[str, Any],
    ) -> EventStreamResponse:
        """POST ``body`` and return the ``data`` payloads of the SSE response."""
        request = self.client.build_request("POST", url, json=body, headers=headers)
        response = await self.client.send(request, stream=True)
        if response.is_error:
            try:
                raw = (await response.aread()).decode("utf-8", errors="replace")
            finally:
                await response.aclose()
            raise ErrorMapper.map_response_error(response, raw)
        return EventStreamResponse(
            headers=dict(response.headers),
            events=self._iter_event_data(response),
        )

    @staticmethod
    async def _iter_event_data(response: httpx.Response) -> AsyncGenerator[str, None]:
        data_lines: List[str] = []
        try:
            async for line in response.aiter_lines():
                if line == "":
                    # Blank line ends an event
                    if not data_lines:
                        continue
                    data = "\n".join(data_lines)
                    data_lines = []
                    if data.strip() == STREAM_DONE_SENTINEL:
                        return
                    yield data
                elif line.startswith("data:"):
                    value = line[5:]
                    data_lines.append(value[1:] if value.startswith(" ") else value)
                # Comments, ids and event names carry nothing we use

            if data_lines:
                data = "\n".join(data_lines)
                if data.strip() != STREAM_DONE_SENTINEL:
                    yield data
        finally:
            await response.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
