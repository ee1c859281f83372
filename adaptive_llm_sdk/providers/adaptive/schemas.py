"""
Wire schemas for the Adaptive chat-completions API.

Backend schema versions disagree on a handful of field names
(``tool_calls``/``toolCalls``, ``reasoning_content``/``reasoning``,
``finish_reason``/``finishReason``, ``media_type``/``mediaType``). The
renames are resolved here, once, through validation aliases, so the rest of
the provider only sees one shape. Every field the backend does not
contractually guarantee is optional.
"""

import json
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from ..errors import ErrorDetail


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class WireGeneratedFile(_WireModel):
    media_type: str = Field(validation_alias=AliasChoices("media_type", "mediaType"))
    data: str


class WireFunction(_WireModel):
    name: Optional[str] = None
    arguments: Any = None


class WireToolCall(_WireModel):
    id: Optional[str] = None
    type: Optional[str] = None
    index: Optional[int] = None
    function: Optional[WireFunction] = None


class WireUsage(_WireModel):
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    reasoning_tokens: Optional[int] = None
    cached_input_tokens: Optional[int] = None
    prompt_tokens_details: Optional[dict] = None
    completion_tokens_details: Optional[dict] = None


class WireMessage(_WireModel):
    """Assistant message of a one-shot response, or the delta of a chunk."""
    role: Optional[str] = None
    content: Optional[str] = None
    reasoning_content: Optional[str] = Field(
        None, validation_alias=AliasChoices("reasoning_content", "reasoning")
    )
    tool_calls: Optional[List[WireToolCall]] = Field(
        None, validation_alias=AliasChoices("tool_calls", "toolCalls")
    )
    generated_files: Optional[List[WireGeneratedFile]] = Field(
        None, validation_alias=AliasChoices("generated_files", "generatedFiles")
    )


class WireChoice(_WireModel):
    index: Optional[int] = None
    message: Optional[WireMessage] = None
    finish_reason: Optional[str] = Field(
        None, validation_alias=AliasChoices("finish_reason", "finishReason")
    )


class WireResponse(_WireModel):
    """One-shot chat-completions response."""
    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[float] = None
    model: Optional[str] = None
    choices: List[WireChoice]
    usage: Optional[WireUsage] = None
    provider: Optional[str] = None
    system_fingerprint: Optional[str] = Field(
        None, validation_alias=AliasChoices("system_fingerprint", "systemFingerprint")
    )


class WireChunkChoice(_WireModel):
    index: Optional[int] = None
    delta: Optional[WireMessage] = None
    finish_reason: Optional[str] = Field(
        None, validation_alias=AliasChoices("finish_reason", "finishReason")
    )


class WireChunk(_WireModel):
    """One streamed chat-completions chunk."""
    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[float] = None
    model: Optional[str] = None
    choices: Optional[List[WireChunkChoice]] = None
    usage: Optional[WireUsage] = None
    provider: Optional[str] = None


class WireErrorChunk(_WireModel):
    """Error reported by the backend in place of a chunk."""
    error: ErrorDetail


@dataclass
class ParsedChunk:
    """
    Outcome of parsing one stream payload.

    Exactly one of ``value`` and ``error`` is set.
    """
    value: Optional[Union[WireChunk, WireErrorChunk]] = None
    error: Optional[Exception] = None
    raw: Any = None

    @property
    def success(self) -> bool:
        return self.error is None


def parse_chunk(payload: Any) -> ParsedChunk:
    """
    Parse a decoded stream payload into a chunk or an explicit error.

    A payload carrying a non-null ``error`` selects the error variant; anything
    else must validate as a chunk. Validation failures are returned, not raised.
    """
    try:
        if isinstance(payload, dict) and payload.get("error") is not None:
            return ParsedChunk(value=WireErrorChunk.model_validate(payload), raw=payload)
        return ParsedChunk(value=WireChunk.model_validate(payload), raw=payload)
    except ValidationError as e:
        return ParsedChunk(error=e, raw=payload)


def parse_chunk_data(data: str) -> ParsedChunk:
    """Parse the text of one SSE ``data:`` field."""
    try:
        payload = json.loads(data)
    except json.JSONDecodeError as e:
        return ParsedChunk(error=e, raw=data)
    return parse_chunk(payload)
