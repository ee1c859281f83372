"""
Request payload builders for the Adaptive chat-completions API.

Converts the canonical prompt into wire messages and assembles the request
body. Everything here is pure: no I/O, no shared state.
"""

import base64
import json
from typing import Any, Dict, List, Optional, Tuple, Union

from ...config.settings import SystemMessageMode
from ...errors import UnsupportedFunctionalityError
from ...models.generation import CallWarning
from ...models.prompt import (
    AssistantMessage,
    FilePart,
    ReasoningPart,
    SystemMessage,
    TextPart,
    ToolCallPart,
    ToolMessage,
    ToolResultPart,
    UserMessage,
)

AUDIO_MEDIA_TYPES = ("audio/wav", "audio/mp3", "audio/mpeg")


def convert_to_base64(data: Union[bytes, str]) -> str:
    """Return base64 text for inline data; strings are assumed to be base64 already."""
    if isinstance(data, str):
        return data
    return base64.b64encode(data).decode("ascii")


def encode_content_part(part: Union[TextPart, FilePart], index: int) -> Dict[str, Any]:
    """
    Encode one user content part as a wire content fragment.

    Args:
        part: Text or file part
        index: Position of the part in its message, used for synthesized filenames

    Returns:
        Wire content fragment

    Raises:
        UnsupportedFunctionalityError: For URL-referenced audio/PDF data and
            media types the backend cannot accept
    """
    if isinstance(part, TextPart):
        return {"type": "text", "text": part.text}

    media_type = part.media_type

    if media_type.startswith("image/"):
        if part.is_reference:
            url = str(part.data)
        else:
            concrete_type = "image/jpeg" if media_type == "image/*" else media_type
            url = f"data:{concrete_type};base64,{convert_to_base64(part.data)}"
        return {"type": "image_url", "image_url": {"url": url}}

    if media_type in AUDIO_MEDIA_TYPES:
        if part.is_reference:
            raise UnsupportedFunctionalityError("audio file parts with URLs")
        return {
            "type": "input_audio",
            "input_audio": {
                "data": convert_to_base64(part.data),
                "format": "wav" if media_type == "audio/wav" else "mp3",
            },
        }

    if media_type == "application/pdf":
        if part.is_reference:
            raise UnsupportedFunctionalityError("PDF file parts with URLs")
        return {
            "type": "file",
            "file": {
                "filename": part.filename or f"part-{index}.pdf",
                "file_data": f"data:application/pdf;base64,{convert_to_base64(part.data)}",
            },
        }

    raise UnsupportedFunctionalityError(f"file part media type {media_type}")


def convert_tool_output(part: ToolResultPart) -> str:
    """
    Extract the wire content of a tool result.

    Structured output wins over the legacy ``result`` value. An empty string
    means the result has no content to send.
    """
    output = part.output
    if output is not None:
        if output.type in ("text", "error-text"):
            return output.value if isinstance(output.value, str) else ""
        return json.dumps(output.value)

    result = part.result
    if result is None:
        return ""
    if isinstance(result, str):
        return result
    return json.dumps(result)


def _convert_user_message(message: UserMessage) -> Dict[str, Any]:
    parts = message.parts()
    # Single text parts collapse to plain string content
    if len(parts) == 1 and isinstance(parts[0], TextPart):
        return {"role": "user", "content": parts[0].text}
    return {
        "role": "user",
        "content": [encode_content_part(part, index) for index, part in enumerate(parts)],
    }


def _convert_assistant_message(message: AssistantMessage) -> Dict[str, Any]:
    text_parts: List[str] = []
    reasoning_parts: List[str] = []
    generated_files: List[Dict[str, str]] = []
    tool_calls: List[Dict[str, Any]] = []

    for part in message.parts():
        if isinstance(part, TextPart):
            text_parts.append(part.text)
        elif isinstance(part, ReasoningPart):
            reasoning_parts.append(part.text)
        elif isinstance(part, FilePart):
            if part.is_reference:
                raise UnsupportedFunctionalityError("generated file parts with URLs")
            generated_files.append({
                "media_type": part.media_type,
                "data": convert_to_base64(part.data),
            })
        elif isinstance(part, ToolCallPart):
            tool_calls.append({
                "id": part.tool_call_id,
                "type": "function",
                "function": {
                    "name": part.tool_name,
                    "arguments": json.dumps(part.input),
                },
            })

    wire_message: Dict[str, Any] = {"role": "assistant", "content": "".join(text_parts)}
    if tool_calls:
        wire_message["tool_calls"] = tool_calls
    reasoning = "".join(reasoning_parts)
    if reasoning:
        wire_message["reasoning_content"] = reasoning
    if generated_files:
        wire_message["generated_files"] = generated_files
    return wire_message


def convert_to_adaptive_messages(
    prompt: List[Any],
    system_message_mode: SystemMessageMode = SystemMessageMode.SYSTEM,
) -> Tuple[List[Dict[str, Any]], List[CallWarning]]:
    """
    Convert a canonical prompt into wire messages.

    Args:
        prompt: Ordered canonical messages
        system_message_mode: Whether system messages pass through or are removed

    Returns:
        Tuple of (wire messages, warnings)
    """
    messages: List[Dict[str, Any]] = []
    warnings: List[CallWarning] = []

    for message in prompt:
        if isinstance(message, SystemMessage):
            if system_message_mode is SystemMessageMode.SYSTEM:
                messages.append({"role": "system", "content": message.content})
            elif system_message_mode is SystemMessageMode.REMOVE:
                warnings.append(CallWarning(
                    type="other",
                    message="system messages are removed for this model",
                ))
            else:
                raise ValueError(f"Unsupported system message mode: {system_message_mode}")
        elif isinstance(message, UserMessage):
            messages.append(_convert_user_message(message))
        elif isinstance(message, AssistantMessage):
            messages.append(_convert_assistant_message(message))
        elif isinstance(message, ToolMessage):
            for tool_response in message.content:
                content = convert_tool_output(tool_response)
                if content:
                    messages.append({
                        "role": "tool",
                        "tool_call_id": tool_response.tool_call_id,
                        "content": content,
                    })
        else:
            raise ValueError(f"Unsupported role: {getattr(message, 'role', type(message).__name__)}")

    return messages, warnings


def build_chat_payload(
    messages: List[Dict[str, Any]],
    params: Dict[str, Any],
    tools: Optional[List[Dict[str, Any]]] = None,
    tool_choice: Optional[Union[str, Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Assemble the chat-completions request body."""
    payload: Dict[str, Any] = {"messages": messages}
    payload.update(params)
    if tools is not None:
        payload["tools"] = tools
    if tool_choice is not None:
        payload["tool_choice"] = tool_choice
    return payload


def build_stream_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Streaming variant of a request body; asks for usage in the final chunk."""
    return {
        **payload,
        "stream": True,
        "stream_options": {"include_usage": True},
    }
