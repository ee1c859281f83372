"""
Adaptive LLM SDK - chat completions through the Adaptive routing backend.

This package normalizes requests and responses between a canonical,
provider-agnostic model interface and the Adaptive wire protocol:
- Canonical prompts (text, images, audio, PDFs, tool calls and results)
- One-shot and streaming generation
- Canonical generation events with strict ordering guarantees
- Usage, finish reason and provider metadata normalization
"""

__version__ = "0.1.0"

from .errors import (
    APICallError,
    InvalidResponseDataError,
    LoadAPIKeyError,
    NoSuchModelError,
    ProviderError,
    UnsupportedFunctionalityError,
)
from .config import ProviderSettings, SystemMessageMode
from .models import (
    AssistantMessage,
    CallOptions,
    CallWarning,
    FilePart,
    FinishReason,
    FunctionTool,
    GenerateResult,
    GenerationEvent,
    ProviderDefinedTool,
    ReasoningPart,
    StreamResult,
    SystemMessage,
    TextPart,
    ToolCallPart,
    ToolChoice,
    ToolMessage,
    ToolResultOutput,
    ToolResultPart,
    Usage,
    UserMessage,
)
from .api.provider import AdaptiveProvider, create_adaptive
from .providers.adaptive import AdaptiveChatModel, StreamEventReducer

__all__ = [
    # Provider
    "AdaptiveProvider",
    "create_adaptive",
    "AdaptiveChatModel",
    "StreamEventReducer",

    # Configuration
    "ProviderSettings",
    "SystemMessageMode",

    # Prompt models
    "AssistantMessage",
    "CallOptions",
    "FilePart",
    "FunctionTool",
    "ProviderDefinedTool",
    "ReasoningPart",
    "SystemMessage",
    "TextPart",
    "ToolCallPart",
    "ToolChoice",
    "ToolMessage",
    "ToolResultOutput",
    "ToolResultPart",
    "UserMessage",

    # Results
    "CallWarning",
    "FinishReason",
    "GenerateResult",
    "GenerationEvent",
    "StreamResult",
    "Usage",

    # Errors
    "APICallError",
    "InvalidResponseDataError",
    "LoadAPIKeyError",
    "NoSuchModelError",
    "ProviderError",
    "UnsupportedFunctionalityError",
]
