"""
One-shot response parsing for the Adaptive chat-completions API.

Also holds the helpers the stream reducer shares with it: finish reason
mapping, response and provider metadata, tool call argument text.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ...config.constants import PROVIDER_NAME
from ...core.normalization.usage import normalize_usage
from ...errors import InvalidResponseDataError
from ...models.generation import (
    Content,
    FileContent,
    FinishReason,
    GenerateResult,
    ReasoningContent,
    ResponseInfo,
    TextContent,
    ToolCallContent,
    Usage,
)
from .schemas import WireMessage, WireResponse, WireToolCall

_FINISH_REASONS = {
    "stop": FinishReason.STOP,
    "length": FinishReason.LENGTH,
    "content_filter": FinishReason.CONTENT_FILTER,
    "function_call": FinishReason.TOOL_CALLS,
    "tool_calls": FinishReason.TOOL_CALLS,
}


def map_finish_reason(finish_reason: Optional[str]) -> FinishReason:
    """Map a wire finish reason to the canonical enum; unknown values map to UNKNOWN."""
    return _FINISH_REASONS.get(finish_reason or "", FinishReason.UNKNOWN)


def timestamp_from_created(created: Optional[float]) -> Optional[datetime]:
    """
    Convert the wire ``created`` epoch seconds to an aware UTC datetime.

    Values no datetime can represent (millisecond epochs, infinities) yield None.
    """
    if created is None:
        return None
    try:
        return datetime.fromtimestamp(created, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def get_response_metadata(
    id: Optional[str] = None,
    model: Optional[str] = None,
    created: Optional[float] = None,
) -> Dict[str, Any]:
    """Response identity shared by sync results and the stream metadata event."""
    return {
        "id": id,
        "model_id": model,
        "timestamp": timestamp_from_created(created),
    }


def build_provider_metadata(provider: Optional[str]) -> Optional[Dict[str, Dict[str, Any]]]:
    """Provider metadata, or None when the backend did not name its provider."""
    if not provider:
        return None
    return {PROVIDER_NAME: {"provider": provider}}


def tool_call_arguments(arguments: Any) -> str:
    """Raw JSON argument text of a wire tool call; defaults to ``"{}"``."""
    if arguments is None or arguments == "":
        return "{}"
    if isinstance(arguments, str):
        return arguments
    return json.dumps(arguments)


def tool_call_content(tool_call: WireToolCall) -> ToolCallContent:
    function = tool_call.function
    return ToolCallContent(
        tool_call_id=tool_call.id or "",
        tool_name=(function.name if function else None) or "",
        input=tool_call_arguments(function.arguments if function else None),
    )


def extract_content(message: Optional[WireMessage]) -> List[Content]:
    """
    Map an assistant message to canonical content.

    Emission order is fixed: text, reasoning, generated files, tool calls.
    """
    content: List[Content] = []
    if message is None:
        return content

    if message.content:
        content.append(TextContent(text=message.content))

    if message.reasoning_content:
        content.append(ReasoningContent(text=message.reasoning_content))

    for generated in message.generated_files or []:
        content.append(FileContent(media_type=generated.media_type, data=generated.data))

    for tool_call in message.tool_calls or []:
        # Untyped calls are function calls; other kinds are skipped
        if tool_call.type not in (None, "function"):
            continue
        content.append(tool_call_content(tool_call))

    return content


def validate_chat_response(payload: Any) -> WireResponse:
    """
    Validate a one-shot response body.

    Raises:
        InvalidResponseDataError: When the body is missing, does not match the
            schema, or contains no choices
    """
    if payload is None:
        raise InvalidResponseDataError("Failed to parse Adaptive API response", data=payload)
    try:
        response = WireResponse.model_validate(payload)
    except ValidationError as e:
        raise InvalidResponseDataError(
            f"Invalid Adaptive API response: {e.error_count()} validation errors",
            data=payload,
        ) from e
    if not response.choices:
        raise InvalidResponseDataError("Adaptive API response contained no choices", data=payload)
    return response


def parse_chat_response(payload: Any) -> GenerateResult:
    """
    Parse a one-shot response body into a canonical result.

    Request body, response headers and warnings are left for the caller to fill.
    """
    response = validate_chat_response(payload)
    choice = response.choices[0]

    if response.usage is not None:
        usage = normalize_usage(response.usage.model_dump(exclude_none=True))
    else:
        usage = Usage.zero()

    finish_reason = (
        map_finish_reason(choice.finish_reason)
        if choice.finish_reason
        else FinishReason.STOP
    )

    return GenerateResult(
        content=extract_content(choice.message),
        finish_reason=finish_reason,
        usage=usage,
        provider_metadata=build_provider_metadata(response.provider),
        response=ResponseInfo(
            **get_response_metadata(response.id, response.model, response.created),
            body=payload,
        ),
    )
