"""Data models for the Adaptive LLM SDK."""

from .events import (
    ErrorEvent,
    FileEvent,
    FinishEvent,
    GenerationEvent,
    ReasoningDeltaEvent,
    ResponseMetadataEvent,
    StreamEvent,
    StreamStartEvent,
    TextDeltaEvent,
    TextStartEvent,
    ToolCallEvent,
)
from .generation import (
    CallWarning,
    Content,
    FileContent,
    FinishReason,
    GenerateResult,
    ReasoningContent,
    ResponseInfo,
    StreamResult,
    TextContent,
    ToolCallContent,
    Usage,
)
from .prompt import (
    AssistantMessage,
    CallOptions,
    FilePart,
    FunctionTool,
    Message,
    Prompt,
    ProviderDefinedTool,
    ReasoningPart,
    SystemMessage,
    TextPart,
    Tool,
    ToolCallPart,
    ToolChoice,
    ToolMessage,
    ToolResultOutput,
    ToolResultPart,
    UserMessage,
)

__all__ = [
    # Prompt models
    "AssistantMessage",
    "CallOptions",
    "FilePart",
    "FunctionTool",
    "Message",
    "Prompt",
    "ProviderDefinedTool",
    "ReasoningPart",
    "SystemMessage",
    "TextPart",
    "Tool",
    "ToolCallPart",
    "ToolChoice",
    "ToolMessage",
    "ToolResultOutput",
    "ToolResultPart",
    "UserMessage",

    # Generation models
    "CallWarning",
    "Content",
    "FileContent",
    "FinishReason",
    "GenerateResult",
    "ReasoningContent",
    "ResponseInfo",
    "StreamResult",
    "TextContent",
    "ToolCallContent",
    "Usage",

    # Events
    "ErrorEvent",
    "FileEvent",
    "FinishEvent",
    "GenerationEvent",
    "ReasoningDeltaEvent",
    "ResponseMetadataEvent",
    "StreamEvent",
    "StreamStartEvent",
    "TextDeltaEvent",
    "TextStartEvent",
    "ToolCallEvent",
]
