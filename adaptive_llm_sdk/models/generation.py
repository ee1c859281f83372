"""Generation result models: finish reasons, usage, warnings and output content."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, AsyncIterator, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class FinishReason(str, Enum):
    """Canonical reasons for a generation to stop."""
    STOP = "stop"
    LENGTH = "length"
    CONTENT_FILTER = "content-filter"
    TOOL_CALLS = "tool-calls"
    ERROR = "error"
    OTHER = "other"
    UNKNOWN = "unknown"


class Usage(BaseModel):
    """
    Canonical token usage.

    Counters are None when the backend did not report them. ``zero()`` is the
    record used when no usage was reported at all.
    """
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    reasoning_tokens: Optional[int] = None
    cached_input_tokens: Optional[int] = None

    @classmethod
    def zero(cls) -> "Usage":
        return cls(input_tokens=0, output_tokens=0, total_tokens=0)

    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())


class CallWarning(BaseModel):
    """Non-fatal degradation attached to a result or the stream start."""
    type: Literal["unsupported-setting", "unsupported-tool", "other"]
    setting: Optional[str] = None
    tool: Optional[Dict[str, Any]] = None
    message: Optional[str] = None
    details: Optional[str] = None


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ReasoningContent(BaseModel):
    type: Literal["reasoning"] = "reasoning"
    text: str


class FileContent(BaseModel):
    type: Literal["file"] = "file"
    media_type: str
    data: str


class ToolCallContent(BaseModel):
    """Tool call emitted by the model; ``input`` is the raw JSON argument text."""
    type: Literal["tool-call"] = "tool-call"
    tool_call_id: str
    tool_name: str
    input: str
    tool_call_type: Literal["function"] = "function"


Content = Annotated[
    Union[TextContent, ReasoningContent, FileContent, ToolCallContent],
    Field(discriminator="type"),
]


class ResponseInfo(BaseModel):
    """Response identity plus the raw transport details of a sync call."""
    id: Optional[str] = None
    model_id: Optional[str] = None
    timestamp: Optional[datetime] = None
    headers: Optional[Dict[str, str]] = None
    body: Any = None


class GenerateResult(BaseModel):
    """Canonical result of a one-shot generation."""
    content: List[Content] = Field(default_factory=list)
    finish_reason: FinishReason
    usage: Usage
    provider_metadata: Optional[Dict[str, Dict[str, Any]]] = None
    request_body: Dict[str, Any] = Field(default_factory=dict)
    response: ResponseInfo = Field(default_factory=ResponseInfo)
    warnings: List[CallWarning] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """Concatenated text content."""
        return "".join(part.text for part in self.content if isinstance(part, TextContent))


@dataclass
class StreamResult:
    """Canonical result of a streaming generation."""
    stream: AsyncIterator[Any]
    request_body: Dict[str, Any] = field(default_factory=dict)
    response_headers: Dict[str, str] = field(default_factory=dict)
