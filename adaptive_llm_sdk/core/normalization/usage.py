"""
Usage normalization module.

This module converts backend usage counters into the canonical ``Usage``
record. Counters map one-to-one; a counter the backend did not report stays
None rather than being guessed.
"""

from typing import Any, Dict, Optional

from ...models.generation import Usage


def _as_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def normalize_usage(usage_data: Optional[Dict[str, Any]]) -> Usage:
    """
    Normalize wire usage data into the canonical record.

    The wire shape is:
    {
        "prompt_tokens": int,
        "completion_tokens": int,
        "total_tokens": int,
        "reasoning_tokens": int,       # optional
        "cached_input_tokens": int     # optional
    }

    Backends that report the OpenAI detail objects instead
    (``prompt_tokens_details.cached_tokens``,
    ``completion_tokens_details.reasoning_tokens``) are read as a fallback.

    Args:
        usage_data: Raw usage data from the backend (optional)

    Returns:
        Usage with every reported counter set; a zeroed record when no usage
        data was provided at all
    """
    if not usage_data:
        return Usage.zero()

    reasoning_tokens = usage_data.get("reasoning_tokens")
    if reasoning_tokens is None:
        details = usage_data.get("completion_tokens_details")
        if isinstance(details, dict):
            reasoning_tokens = details.get("reasoning_tokens")

    cached_input_tokens = usage_data.get("cached_input_tokens")
    if cached_input_tokens is None:
        details = usage_data.get("prompt_tokens_details")
        if isinstance(details, dict):
            cached_input_tokens = details.get("cached_tokens")

    return Usage(
        input_tokens=_as_int(usage_data.get("prompt_tokens")),
        output_tokens=_as_int(usage_data.get("completion_tokens")),
        total_tokens=_as_int(usage_data.get("total_tokens")),
        reasoning_tokens=_as_int(reasoning_tokens),
        cached_input_tokens=_as_int(cached_input_tokens),
    )
