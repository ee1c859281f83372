"""Unit tests for the stream event reducer."""

import json

import pytest

from adaptive_llm_sdk.models.events import (
    ErrorEvent,
    FileEvent,
    FinishEvent,
    ReasoningDeltaEvent,
    ResponseMetadataEvent,
    StreamStartEvent,
    TextDeltaEvent,
    TextStartEvent,
    ToolCallEvent,
)
from adaptive_llm_sdk.models.generation import CallWarning, FinishReason, Usage
from adaptive_llm_sdk.providers.adaptive.streaming import StreamEventReducer, reduce_stream
from tests.helpers.streaming_mocks import (
    as_async_chunks,
    collect_events,
    make_chunk,
    make_error_chunk,
    make_function_tool_call,
    make_usage_chunk,
    parsed,
    text_stream_chunks,
)


def run_reducer(chunks, warnings=None):
    """Drive a reducer synchronously over wire chunks."""
    reducer = StreamEventReducer(warnings=warnings, model_id="")
    events = reducer.start()
    for chunk in parsed(chunks):
        events.extend(reducer.process(chunk))
    events.extend(reducer.flush())
    return events


def of_type(events, event_type):
    return [e for e in events if isinstance(e, event_type)]


class TestStreamLifecycle:
    """Test event ordering guarantees."""

    def test_text_stream(self):
        events = run_reducer(text_stream_chunks(["Hello", " world"]))

        assert [e.type for e in events] == [
            "stream-start",
            "response-metadata",
            "text-start",
            "text-delta",
            "text-delta",
            "finish",
        ]
        assert "".join(e.delta for e in of_type(events, TextDeltaEvent)) == "Hello world"

        finish = events[-1]
        assert finish.finish_reason is FinishReason.STOP
        assert finish.usage == Usage(input_tokens=10, output_tokens=5, total_tokens=15)
        assert finish.provider_metadata == {"adaptive": {"provider": "openai"}}

    def test_warnings_on_stream_start(self):
        warning = CallWarning(type="unsupported-setting", setting="seed")
        events = run_reducer([], warnings=[warning])

        assert isinstance(events[0], StreamStartEvent)
        assert events[0].warnings == [warning]

    def test_empty_stream(self):
        events = run_reducer([])

        assert [e.type for e in events] == ["stream-start", "finish"]
        assert events[-1].finish_reason is FinishReason.STOP
        assert events[-1].usage == Usage.zero()
        assert events[-1].provider_metadata is None

    def test_response_metadata_emitted_once(self):
        events = run_reducer([
            make_chunk(content="a", chunk_id="first", model="m-1"),
            make_chunk(content="b", chunk_id="second", model="m-2"),
        ])

        metadata = of_type(events, ResponseMetadataEvent)
        assert len(metadata) == 1
        assert metadata[0].id == "first"
        assert metadata[0].model_id == "m-1"
        assert metadata[0].timestamp is not None

    def test_text_start_emitted_once_before_deltas(self):
        events = run_reducer([make_chunk(content=w) for w in ["a", "b", "c"]])

        types = [e.type for e in events]
        assert types.count("text-start") == 1
        assert types.index("text-start") < types.index("text-delta")
        assert of_type(events, TextStartEvent)[0].id == "text-0"
        assert all(e.id == "text-0" for e in of_type(events, TextDeltaEvent))

    def test_empty_string_content_opens_text(self):
        events = run_reducer([make_chunk(content="")])

        assert [e.type for e in events][2:4] == ["text-start", "text-delta"]

    def test_chunk_without_delta(self):
        events = run_reducer([make_chunk(with_delta=False, finish_reason="length")])

        assert [e.type for e in events] == ["stream-start", "response-metadata", "finish"]
        assert events[-1].finish_reason is FinishReason.LENGTH

    def test_process_after_flush_rejected(self):
        reducer = StreamEventReducer()
        reducer.start()
        reducer.flush()

        with pytest.raises(RuntimeError):
            reducer.process(parsed([make_chunk(content="late")])[0])
        with pytest.raises(RuntimeError):
            reducer.flush()


class TestStreamAccumulation:
    """Test last-writer-wins accumulation."""

    def test_usage_last_writer_wins(self):
        events = run_reducer([
            make_chunk(content="a", usage={"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 2}),
            make_usage_chunk(prompt_tokens=10, completion_tokens=20),
        ])

        assert events[-1].usage == Usage(input_tokens=10, output_tokens=20, total_tokens=30)

    def test_provider_last_writer_wins(self):
        events = run_reducer([
            make_chunk(content="a", provider="openai"),
            make_chunk(content="b", provider="anthropic"),
            make_chunk(content="c"),
        ])

        assert events[-1].provider_metadata == {"adaptive": {"provider": "anthropic"}}

    def test_finish_reason_last_writer_wins(self):
        events = run_reducer([
            make_chunk(finish_reason="length"),
            make_chunk(finish_reason="tool_calls"),
        ])

        assert events[-1].finish_reason is FinishReason.TOOL_CALLS

    def test_unknown_finish_reason(self):
        events = run_reducer([make_chunk(finish_reason="end_turn")])

        assert events[-1].finish_reason is FinishReason.UNKNOWN

    def test_finish_reason_camel_case(self):
        chunk = make_chunk(content="x")
        chunk["choices"][0] = {"delta": {}, "finishReason": "content_filter"}
        events = run_reducer([chunk])

        assert events[-1].finish_reason is FinishReason.CONTENT_FILTER


class TestStreamDeltas:
    """Test delta extraction."""

    def test_reasoning_delta(self):
        events = run_reducer([
            make_chunk(reasoning="think"),
            {"id": "x", "choices": [{"delta": {"reasoning": "ing"}}]},
        ])

        assert [e.delta for e in of_type(events, ReasoningDeltaEvent)] == ["think", "ing"]
        assert of_type(events, TextStartEvent) == []

    def test_generated_files(self):
        events = run_reducer([make_chunk(generated_files=[
            {"media_type": "image/png", "data": "AAAA"},
            {"mediaType": "image/jpeg", "data": "BBBB"},
        ])])

        files = of_type(events, FileEvent)
        assert [(f.media_type, f.data) for f in files] == [("image/png", "AAAA"), ("image/jpeg", "BBBB")]

    def test_function_tool_call(self):
        events = run_reducer([
            make_chunk(tool_calls=[make_function_tool_call()]),
            make_chunk(finish_reason="tool_calls"),
        ])

        calls = of_type(events, ToolCallEvent)
        assert len(calls) == 1
        assert calls[0].tool_call_id == "call_1"
        assert calls[0].tool_name == "get_weather"
        assert json.loads(calls[0].input) == {"city": "Paris"}
        assert calls[0].tool_call_type == "function"
        assert events[-1].finish_reason is FinishReason.TOOL_CALLS

    def test_tool_call_without_arguments(self):
        events = run_reducer([
            make_chunk(tool_calls=[make_function_tool_call(arguments=None)]),
        ])

        assert of_type(events, ToolCallEvent)[0].input == "{}"

    def test_non_function_tool_call_dropped(self):
        events = run_reducer([
            make_chunk(tool_calls=[
                make_function_tool_call(call_id="c1", call_type="custom"),
                make_function_tool_call(call_id="c2", call_type=None),
                make_function_tool_call(call_id="c3"),
            ]),
        ])

        assert [c.tool_call_id for c in of_type(events, ToolCallEvent)] == ["c3"]

    def test_delta_event_order_within_chunk(self):
        events = run_reducer([make_chunk(
            content="text",
            reasoning="why",
            generated_files=[{"media_type": "image/png", "data": "AAAA"}],
            tool_calls=[make_function_tool_call()],
        )])

        assert [e.type for e in events][2:7] == [
            "text-start", "text-delta", "reasoning-delta", "file", "tool-call",
        ]


class TestStreamErrors:
    """Test malformed chunks and backend-reported errors."""

    def test_malformed_chunk(self):
        events = run_reducer(["not json"])

        assert [e.type for e in events] == ["stream-start", "error", "finish"]
        assert isinstance(events[1].error, json.JSONDecodeError)
        assert events[-1].finish_reason is FinishReason.ERROR
        assert events[-1].usage == Usage.zero()

    def test_error_is_sticky(self):
        events = run_reducer([
            make_chunk(content="partial"),
            "{broken",
            make_chunk(content="more", finish_reason="stop"),
            make_usage_chunk(provider="openai"),
        ])

        assert len(of_type(events, ErrorEvent)) == 1
        assert [e.delta for e in of_type(events, TextDeltaEvent)] == ["partial", "more"]
        finish = events[-1]
        assert finish.finish_reason is FinishReason.ERROR
        assert finish.usage.total_tokens == 15
        assert finish.provider_metadata == {"adaptive": {"provider": "openai"}}

    def test_backend_error_chunk(self):
        events = run_reducer([make_error_chunk("Upstream provider failed")])

        assert [e.type for e in events] == ["stream-start", "error", "finish"]
        assert events[1].error == "Upstream provider failed"
        assert events[-1].finish_reason is FinishReason.ERROR

    def test_error_before_first_chunk_defers_metadata(self):
        events = run_reducer(["oops", make_chunk(content="hi")])

        assert [e.type for e in events] == [
            "stream-start", "error", "response-metadata", "text-start", "text-delta", "finish",
        ]

    def test_error_chunk_counts(self):
        reducer = StreamEventReducer()
        reducer.start()
        for chunk in parsed(["x", make_chunk(content="a"), make_error_chunk()]):
            reducer.process(chunk)

        assert reducer.state.chunks == 3
        assert reducer.state.error_chunks == 2


class TestReduceStream:
    """Test the async driver."""

    @pytest.mark.asyncio
    async def test_reduce_stream(self):
        reducer = StreamEventReducer(model_id="")
        events = await collect_events(
            reduce_stream(as_async_chunks(parsed(text_stream_chunks(["Hi"]))), reducer)
        )

        assert isinstance(events[0], StreamStartEvent)
        assert isinstance(events[-1], FinishEvent)
        assert reducer.flushed

    @pytest.mark.asyncio
    async def test_early_stop_emits_no_finish(self):
        reducer = StreamEventReducer(model_id="")
        stream = reduce_stream(as_async_chunks(parsed(text_stream_chunks(["a", "b", "c"]))), reducer)

        events = []
        async for event in stream:
            events.append(event)
            if isinstance(event, TextDeltaEvent):
                break
        await stream.aclose()

        assert not any(isinstance(e, FinishEvent) for e in events)
        assert not reducer.flushed


class TestStreamTolerance:
    """Test schema-valid chunks with unusual values."""

    def test_millisecond_created_still_finishes(self):
        events = run_reducer([make_chunk(content="hi", created=1733000000000)])

        assert [e.type for e in events] == [
            "stream-start", "response-metadata", "text-start", "text-delta", "finish",
        ]
        assert events[1].timestamp is None
        assert events[-1].finish_reason is FinishReason.STOP

    def test_null_error_field_is_not_an_error(self):
        chunk = make_chunk(content="hi")
        chunk["error"] = None
        events = run_reducer([chunk])

        assert of_type(events, ErrorEvent) == []
        assert events[-1].finish_reason is FinishReason.STOP

    def test_usage_chunk_with_null_choices(self):
        usage_chunk = make_usage_chunk(prompt_tokens=4, completion_tokens=6, provider="openai")
        usage_chunk["choices"] = None
        events = run_reducer([make_chunk(content="hi"), usage_chunk])

        assert of_type(events, ErrorEvent) == []
        assert events[-1].usage == Usage(input_tokens=4, output_tokens=6, total_tokens=10)
        assert events[-1].provider_metadata == {"adaptive": {"provider": "openai"}}
