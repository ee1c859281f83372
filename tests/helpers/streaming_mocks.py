"""Mock streaming helpers for testing the Adaptive stream pipeline."""

import json
from typing import Any, AsyncGenerator, Dict, Iterable, List, Optional, Union

from adaptive_llm_sdk.providers.adaptive.schemas import ParsedChunk, parse_chunk, parse_chunk_data


def make_chunk(
    content: Optional[str] = None,
    reasoning: Optional[str] = None,
    tool_calls: Optional[List[Dict[str, Any]]] = None,
    generated_files: Optional[List[Dict[str, str]]] = None,
    finish_reason: Optional[str] = None,
    usage: Optional[Dict[str, Any]] = None,
    provider: Optional[str] = None,
    chunk_id: str = "chatcmpl-123",
    model: str = "gpt-4o-mini",
    created: int = 1700000000,
    with_delta: bool = True,
) -> Dict[str, Any]:
    """Create a wire chat-completions chunk."""
    delta: Dict[str, Any] = {}
    if content is not None:
        delta["content"] = content
    if reasoning is not None:
        delta["reasoning_content"] = reasoning
    if tool_calls is not None:
        delta["tool_calls"] = tool_calls
    if generated_files is not None:
        delta["generated_files"] = generated_files

    choice: Dict[str, Any] = {"index": 0, "finish_reason": finish_reason}
    if with_delta:
        choice["delta"] = delta

    chunk: Dict[str, Any] = {
        "id": chunk_id,
        "object": "chat.completion.chunk",
        "created": created,
        "model": model,
        "choices": [choice],
    }
    if usage is not None:
        chunk["usage"] = usage
    if provider is not None:
        chunk["provider"] = provider
    return chunk


def make_usage_chunk(
    prompt_tokens: int = 10,
    completion_tokens: int = 5,
    provider: Optional[str] = None,
) -> Dict[str, Any]:
    """Create the trailing usage-only chunk sent with ``include_usage``."""
    chunk: Dict[str, Any] = {
        "id": "chatcmpl-123",
        "object": "chat.completion.chunk",
        "created": 1700000000,
        "model": "gpt-4o-mini",
        "choices": [],
        "usage": {
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "total_tokens": prompt_tokens + completion_tokens,
        },
    }
    if provider is not None:
        chunk["provider"] = provider
    return chunk


def make_error_chunk(message: str = "Upstream provider failed", error_type: str = "server_error") -> Dict[str, Any]:
    """Create a backend-reported stream error."""
    return {"error": {"message": message, "type": error_type, "param": None, "code": None}}


def make_function_tool_call(
    call_id: str = "call_1",
    name: str = "get_weather",
    arguments: Any = '{"city":"Paris"}',
    call_type: Optional[str] = "function",
) -> Dict[str, Any]:
    """Create a wire tool call."""
    tool_call: Dict[str, Any] = {
        "id": call_id,
        "index": 0,
        "function": {"name": name, "arguments": arguments},
    }
    if call_type is not None:
        tool_call["type"] = call_type
    return tool_call


def parsed(chunks: Iterable[Union[Dict[str, Any], str]]) -> List[ParsedChunk]:
    """Parse chunk dicts (or raw SSE data strings) the way the stream does."""
    return [
        parse_chunk_data(chunk) if isinstance(chunk, str) else parse_chunk(chunk)
        for chunk in chunks
    ]


async def as_async_chunks(chunks: Iterable[ParsedChunk]) -> AsyncGenerator[ParsedChunk, None]:
    """Yield parsed chunks asynchronously."""
    for chunk in chunks:
        yield chunk


def sse_body(chunks: Iterable[Union[Dict[str, Any], str]], done: bool = True) -> bytes:
    """Encode chunks as a server-sent event stream body."""
    lines = []
    for chunk in chunks:
        data = chunk if isinstance(chunk, str) else json.dumps(chunk)
        lines.append(f"data: {data}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def text_stream_chunks(words: List[str], provider: Optional[str] = "openai") -> List[Dict[str, Any]]:
    """Create a typical text stream: deltas, a finish chunk and a usage chunk."""
    chunks = [make_chunk(content=word) for word in words]
    chunks.append(make_chunk(finish_reason="stop"))
    chunks.append(make_usage_chunk(provider=provider))
    return chunks


async def collect_events(stream) -> List[Any]:
    """Drain an async event stream into a list."""
    return [event async for event in stream]
