"""
Stream reduction for the Adaptive chat-completions API.

``StreamEventReducer`` turns the ordered sequence of parsed SSE chunks of one
streaming call into canonical generation events. One reducer serves exactly
one stream; chunks are handed to it sequentially and each ``process`` call is
a single atomic state transition.

Lifecycle: ``start`` (stream-start) -> ``process`` per chunk -> ``flush``
(finish). Usage, provider and finish reason are snapshots on the wire, so
the latest value wins instead of being summed.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import AsyncGenerator, AsyncIterable, List, Optional

from ...core.normalization.usage import normalize_usage
from ...models.events import (
    TEXT_ID,
    ErrorEvent,
    FileEvent,
    FinishEvent,
    GenerationEvent,
    ReasoningDeltaEvent,
    ResponseMetadataEvent,
    StreamStartEvent,
    TextDeltaEvent,
    TextStartEvent,
    ToolCallEvent,
)
from ...models.generation import CallWarning, FinishReason, Usage
from ...observability.logging import ProviderLogger
from .parsers import (
    build_provider_metadata,
    get_response_metadata,
    map_finish_reason,
    tool_call_arguments,
)
from .schemas import ParsedChunk, WireErrorChunk, WireMessage

logger = ProviderLogger("adaptive")


@dataclass
class StreamReducerState:
    """Accumulated state of one stream."""
    finish_reason: FinishReason = FinishReason.UNKNOWN
    finish_reason_set: bool = False
    usage: Usage = field(default_factory=Usage)
    is_first_chunk: bool = True
    is_active_text: bool = False
    provider: Optional[str] = None
    chunks: int = 0
    error_chunks: int = 0


class StreamEventReducer:
    """Reduces parsed wire chunks of one stream into canonical events."""

    def __init__(
        self,
        warnings: Optional[List[CallWarning]] = None,
        model_id: str = "",
        request_id: Optional[str] = None,
    ):
        self.state = StreamReducerState()
        self.warnings = list(warnings or [])
        self.model_id = model_id
        self.request_id = request_id
        self._start_time: Optional[float] = None
        self._flushed = False

    @property
    def flushed(self) -> bool:
        return self._flushed

    def start(self) -> List[GenerationEvent]:
        """Open the stream; the only event allowed before any chunk."""
        self._start_time = time.time()
        return [StreamStartEvent(warnings=list(self.warnings))]

    def process(self, chunk: ParsedChunk) -> List[GenerationEvent]:
        """
        Apply one chunk to the state and return the events it produces.

        Malformed chunks and backend-reported errors yield a single error
        event and force the finish reason to ``error``; nothing else is
        extracted from them.
        """
        if self._flushed:
            raise RuntimeError("Stream already flushed; no further chunks accepted")

        state = self.state
        state.chunks += 1

        if not chunk.success:
            self._mark_error()
            logger.warning(
                "Dropping malformed stream chunk",
                model=self.model_id,
                request_id=self.request_id,
                error_type=type(chunk.error).__name__,
            )
            return [ErrorEvent(error=chunk.error)]

        value = chunk.value
        if isinstance(value, WireErrorChunk):
            self._mark_error()
            logger.warning(
                "Backend reported a stream error",
                model=self.model_id,
                request_id=self.request_id,
                error_type=value.error.type,
            )
            return [ErrorEvent(error=value.error.message)]

        events: List[GenerationEvent] = []

        if state.is_first_chunk:
            state.is_first_chunk = False
            events.append(ResponseMetadataEvent(
                **get_response_metadata(value.id, value.model, value.created)
            ))

        if value.usage is not None:
            state.usage = normalize_usage(value.usage.model_dump(exclude_none=True))

        if value.provider:
            state.provider = value.provider

        choice = value.choices[0] if value.choices else None
        if choice is not None and choice.finish_reason is not None:
            self._set_finish_reason(map_finish_reason(choice.finish_reason))

        if choice is None or choice.delta is None:
            return events

        events.extend(self._delta_events(choice.delta))
        return events

    def flush(self) -> List[GenerationEvent]:
        """Close the stream with exactly one finish event."""
        if self._flushed:
            raise RuntimeError("Stream already flushed")
        self._flushed = True

        state = self.state
        finish_reason = state.finish_reason if state.finish_reason_set else FinishReason.STOP
        usage = Usage.zero() if state.usage.is_empty() else state.usage

        duration = time.time() - self._start_time if self._start_time else 0.0
        logger.log_streaming_metrics(
            chunks=state.chunks,
            error_chunks=state.error_chunks,
            duration=duration,
            model=self.model_id,
            request_id=self.request_id,
        )

        return [FinishEvent(
            finish_reason=finish_reason,
            usage=usage,
            provider_metadata=build_provider_metadata(state.provider),
        )]

    def _mark_error(self) -> None:
        self.state.error_chunks += 1
        self.state.finish_reason = FinishReason.ERROR
        self.state.finish_reason_set = True

    def _set_finish_reason(self, finish_reason: FinishReason) -> None:
        # Error is sticky until flush
        if self.state.finish_reason is FinishReason.ERROR:
            return
        self.state.finish_reason = finish_reason
        self.state.finish_reason_set = True

    def _delta_events(self, delta: WireMessage) -> List[GenerationEvent]:
        state = self.state
        events: List[GenerationEvent] = []

        if delta.content is not None:
            if not state.is_active_text:
                state.is_active_text = True
                events.append(TextStartEvent(id=TEXT_ID))
            events.append(TextDeltaEvent(id=TEXT_ID, delta=delta.content))

        if delta.reasoning_content is not None:
            events.append(ReasoningDeltaEvent(delta=delta.reasoning_content))

        for generated in delta.generated_files or []:
            events.append(FileEvent(media_type=generated.media_type, data=generated.data))

        for tool_call in delta.tool_calls or []:
            if tool_call.type != "function":
                continue
            function = tool_call.function
            events.append(ToolCallEvent(
                tool_call_id=tool_call.id or "",
                tool_name=(function.name if function else None) or "",
                input=tool_call_arguments(function.arguments if function else None),
            ))

        return events


async def reduce_stream(
    chunks: AsyncIterable[ParsedChunk],
    reducer: StreamEventReducer,
) -> AsyncGenerator[GenerationEvent, None]:
    """
    Drive ``reducer`` over an async chunk source.

    The finish event is only produced when the source is exhausted; if the
    consumer stops early or the transport fails, the stream just ends.
    """
    for event in reducer.start():
        yield event
    async for chunk in chunks:
        for event in reducer.process(chunk):
            yield event
    for event in reducer.flush():
        yield event
