"""Adaptive chat-completions provider."""

from .adapter import AdaptiveChatConfig, AdaptiveChatModel
from .options import AdaptiveProviderOptions
from .streaming import StreamEventReducer, StreamReducerState

__all__ = [
    "AdaptiveChatConfig",
    "AdaptiveChatModel",
    "AdaptiveProviderOptions",
    "StreamEventReducer",
    "StreamReducerState",
]
