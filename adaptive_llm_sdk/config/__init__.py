"""Configuration module for the Adaptive LLM SDK."""

from .settings import ProviderSettings, SystemMessageMode

# Import all constants
from .constants import *

__all__ = [
    "ProviderSettings",
    "SystemMessageMode",
]
