"""
Provider Models Layer

This layer contains provider-specific chat model implementations.
Each model translates between the SDK's canonical prompt and events and
the provider's wire protocol. Concrete models live in subpackages, e.g.
``providers.adaptive``.
"""

from .base import LanguageModel, ProviderError
from .errors import ErrorMapper

__all__ = [
    "LanguageModel",
    "ProviderError",
    "ErrorMapper",
]
