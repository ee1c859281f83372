"""Core provider-agnostic logic for the Adaptive LLM SDK.

This package contains logic shared by provider adapters:
- normalization: call-setting and usage normalization
"""

__all__ = []
