"""
Parameter normalization module.

This module maps canonical call settings onto backend request fields. Settings
the backend has no equivalent for are dropped from the request and reported as
``unsupported-setting`` warnings instead of being silently lost.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ...models.generation import CallWarning
from ...models.prompt import CallOptions

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound=BaseModel)

# Canonical settings with no chat-completions equivalent
UNSUPPORTED_SETTINGS = ("top_k", "response_format", "seed")


def collect_unsupported_settings(options: CallOptions) -> List[CallWarning]:
    """Return one warning per unsupported setting the caller provided."""
    return [
        CallWarning(type="unsupported-setting", setting=name)
        for name in UNSUPPORTED_SETTINGS
        if getattr(options, name) is not None
    ]


def parse_provider_options(
    provider_options: Optional[Mapping[str, Any]],
    schema: Type[OptionsT],
    provider: str,
) -> OptionsT:
    """
    Validate provider-specific options against ``schema``.

    Options may be given flat or nested under the provider name; the nested
    form wins when present. Unknown keys are ignored by the schema and a
    malformed payload degrades to the schema's empty default rather than
    failing the request.

    Args:
        provider_options: Raw option bag from the call
        schema: Pydantic model describing the recognized options
        provider: Provider name used for the nested lookup

    Returns:
        Validated options instance
    """
    raw: Mapping[str, Any] = provider_options or {}
    nested = raw.get(provider)
    if isinstance(nested, Mapping):
        raw = nested

    try:
        return schema.model_validate(dict(raw))
    except ValidationError as e:
        logger.warning(
            "Ignoring invalid %s provider options (%d validation errors)",
            provider,
            e.error_count(),
        )
        return schema()


def normalize_params(
    options: CallOptions,
    provider_options: Optional[BaseModel] = None,
) -> Tuple[Dict[str, Any], List[CallWarning]]:
    """
    Normalize call settings into chat-completions request fields.

    Args:
        options: Canonical call options
        provider_options: Validated provider options, merged verbatim

    Returns:
        Tuple of (request fields without messages/tools, warnings)
    """
    warnings = collect_unsupported_settings(options)
    for warning in warnings:
        logger.debug("Dropping unsupported setting %s", warning.setting)

    normalized: Dict[str, Any] = {}

    if isinstance(options.max_output_tokens, int):
        normalized["max_tokens"] = options.max_output_tokens

    standard = (
        ("temperature", options.temperature),
        ("top_p", options.top_p),
        ("stop", options.stop_sequences),
        ("presence_penalty", options.presence_penalty),
        ("frequency_penalty", options.frequency_penalty),
    )
    for key, value in standard:
        if value is not None:
            normalized[key] = value

    if provider_options is not None:
        normalized.update(provider_options.model_dump(exclude_none=True))

    return normalized, warnings
