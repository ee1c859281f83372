"""
Public API Layer

This layer contains the public-facing API of the Adaptive LLM SDK.
All user-facing classes and functions should be exposed through this layer.
"""

from .provider import AdaptiveProvider, create_adaptive

__all__ = ["AdaptiveProvider", "create_adaptive"]
