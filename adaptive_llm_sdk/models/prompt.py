"""Canonical, provider-agnostic prompt and call option models.

A prompt is an ordered list of role-tagged messages. Role ordering is decided
by the caller and never reinterpreted; only the content shape varies per role.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field


class TextPart(BaseModel):
    """Plain text content."""
    type: Literal["text"] = "text"
    text: str


class ReasoningPart(BaseModel):
    """Model reasoning replayed back in an assistant message."""
    type: Literal["reasoning"] = "reasoning"
    text: str


class FilePart(BaseModel):
    """
    File content with a declared media type.

    ``data`` is either inline (raw ``bytes`` or a base64 ``str``) or an
    external reference given as an ``httpx.URL``.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    type: Literal["file"] = "file"
    media_type: str
    data: Union[bytes, str, httpx.URL]
    filename: Optional[str] = None

    @property
    def is_reference(self) -> bool:
        return isinstance(self.data, httpx.URL)


class ToolCallPart(BaseModel):
    """A tool invocation previously produced by the model."""
    type: Literal["tool-call"] = "tool-call"
    tool_call_id: str
    tool_name: str
    input: Any = None


class ToolResultOutput(BaseModel):
    """Structured tool output."""
    type: Literal["text", "json", "error-text", "error-json", "content"]
    value: Any = None


class ToolResultPart(BaseModel):
    """
    Result of a tool call.

    Either ``output`` (structured) or ``result`` (legacy scalar/array value)
    carries the payload. ``output`` wins when both are set.
    """
    type: Literal["tool-result"] = "tool-result"
    tool_call_id: str
    tool_name: str = ""
    output: Optional[ToolResultOutput] = None
    result: Any = None


UserContentPart = Annotated[Union[TextPart, FilePart], Field(discriminator="type")]

AssistantContentPart = Annotated[
    Union[TextPart, ReasoningPart, FilePart, ToolCallPart],
    Field(discriminator="type"),
]


class SystemMessage(BaseModel):
    role: Literal["system"] = "system"
    content: str


class UserMessage(BaseModel):
    role: Literal["user"] = "user"
    content: Union[str, List[UserContentPart]]

    def parts(self) -> List[Union[TextPart, FilePart]]:
        if isinstance(self.content, str):
            return [TextPart(text=self.content)]
        return list(self.content)


class AssistantMessage(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: Union[str, List[AssistantContentPart]]

    def parts(self) -> List[Union[TextPart, ReasoningPart, FilePart, ToolCallPart]]:
        if isinstance(self.content, str):
            return [TextPart(text=self.content)]
        return list(self.content)


class ToolMessage(BaseModel):
    role: Literal["tool"] = "tool"
    content: List[ToolResultPart]


Message = Annotated[
    Union[SystemMessage, UserMessage, AssistantMessage, ToolMessage],
    Field(discriminator="role"),
]

Prompt = List[Message]


class FunctionTool(BaseModel):
    """Tool the model may call, described by a JSON schema."""
    type: Literal["function"] = "function"
    name: str
    description: Optional[str] = None
    input_schema: Optional[Dict[str, Any]] = None


class ProviderDefinedTool(BaseModel):
    """Tool implemented by a specific upstream provider."""
    type: Literal["provider-defined"] = "provider-defined"
    id: str
    name: str
    args: Dict[str, Any] = Field(default_factory=dict)


Tool = Annotated[Union[FunctionTool, ProviderDefinedTool], Field(discriminator="type")]


class ToolChoice(BaseModel):
    """
    Tool-choice policy.

    ``type`` is one of ``auto``, ``none``, ``required`` or ``tool``; the
    latter names the function in ``tool_name``. The type is kept as a plain
    string so unknown kinds reach the tool normalizer and fail there.
    """
    type: str
    tool_name: Optional[str] = None


class CallOptions(BaseModel):
    """
    Options for a single generate or stream call.

    Cancellation is handled by cancelling the awaiting task; there is no
    separate abort handle.
    """
    prompt: List[Message]
    max_output_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    stop_sequences: Optional[List[str]] = None
    response_format: Optional[Dict[str, Any]] = None
    seed: Optional[int] = None
    provider_options: Optional[Dict[str, Any]] = None
    tools: Optional[List[Tool]] = None
    tool_choice: Optional[ToolChoice] = None
    headers: Optional[Dict[str, Optional[str]]] = None
