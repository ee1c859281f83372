"""Normalization layer for standardizing provider interfaces.

This layer handles:
- Call-setting normalization (dropped settings become warnings)
- Provider-option validation with a permissive fallback
- Usage data normalization
"""

from .params import normalize_params, parse_provider_options
from .usage import normalize_usage

__all__ = ["normalize_params", "parse_provider_options", "normalize_usage"]
