"""Event models for streaming responses.

This module defines the canonical, provider-agnostic events a streaming call
emits. Every stream starts with ``StreamStartEvent`` and, unless the consumer
cancels it, ends with exactly one ``FinishEvent``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from .generation import CallWarning, FinishReason, Usage

# Streams carry a single text span
TEXT_ID = "text-0"


@dataclass
class StreamEvent:
    """Base class for all streaming events."""
    type: str = ""  # Will be set by subclasses


@dataclass
class StreamStartEvent(StreamEvent):
    """Event emitted before any chunk, carrying request-time warnings."""
    type: str = field(default="stream-start", init=False)
    warnings: List[CallWarning] = field(default_factory=list)


@dataclass
class ResponseMetadataEvent(StreamEvent):
    """Event emitted once, for the first successfully parsed chunk."""
    type: str = field(default="response-metadata", init=False)
    id: Optional[str] = None
    model_id: Optional[str] = None
    timestamp: Optional[datetime] = None


@dataclass
class TextStartEvent(StreamEvent):
    """Event opening the text span of a stream."""
    type: str = field(default="text-start", init=False)
    id: str = TEXT_ID


@dataclass
class TextDeltaEvent(StreamEvent):
    """Event carrying one incremental text fragment."""
    type: str = field(default="text-delta", init=False)
    id: str = TEXT_ID
    delta: str = ""


@dataclass
class ReasoningDeltaEvent(StreamEvent):
    """Event carrying one incremental reasoning fragment."""
    type: str = field(default="reasoning-delta", init=False)
    delta: str = ""


@dataclass
class FileEvent(StreamEvent):
    """Event carrying one generated file."""
    type: str = field(default="file", init=False)
    media_type: str = ""
    data: str = ""


@dataclass
class ToolCallEvent(StreamEvent):
    """Event carrying one complete function call."""
    type: str = field(default="tool-call", init=False)
    tool_call_id: str = ""
    tool_name: str = ""
    input: str = "{}"
    tool_call_type: str = "function"


@dataclass
class ErrorEvent(StreamEvent):
    """Event emitted for a malformed chunk or a backend-reported error."""
    type: str = field(default="error", init=False)
    error: Any = None


@dataclass
class FinishEvent(StreamEvent):
    """Terminal event of a stream."""
    type: str = field(default="finish", init=False)
    finish_reason: FinishReason = FinishReason.STOP
    usage: Usage = field(default_factory=Usage.zero)
    provider_metadata: Optional[Dict[str, Dict[str, Any]]] = None


GenerationEvent = Union[
    StreamStartEvent,
    ResponseMetadataEvent,
    TextStartEvent,
    TextDeltaEvent,
    ReasoningDeltaEvent,
    FileEvent,
    ToolCallEvent,
    ErrorEvent,
    FinishEvent,
]
