"""
Provider configuration.

Configuration is explicit: a ``ProviderSettings`` instance is built by the
caller (or from the environment) and handed to the provider factory. Nothing
here is process-wide mutable state.
"""

import os
from enum import Enum
from typing import Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .constants import (
    API_KEY_ENV_VAR,
    BASE_URL_ENV_VAR,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    TIMEOUT_ENV_VAR,
)
from ..errors import LoadAPIKeyError

# Load environment variables
load_dotenv()


class SystemMessageMode(str, Enum):
    """How system-role messages are transported."""
    SYSTEM = "system"
    REMOVE = "remove"


def _default_base_url() -> str:
    return os.getenv(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL


def _default_timeout() -> float:
    # Allow overriding default timeout via env variable (seconds)
    try:
        return float(os.getenv(TIMEOUT_ENV_VAR, str(DEFAULT_TIMEOUT)))
    except ValueError:
        return DEFAULT_TIMEOUT


class ProviderSettings(BaseModel):
    """Settings for an Adaptive provider instance."""
    base_url: str = Field(default_factory=_default_base_url, validate_default=True)
    api_key: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    timeout: float = Field(default_factory=_default_timeout, gt=0)
    system_message_mode: SystemMessageMode = SystemMessageMode.SYSTEM

    @field_validator("base_url")
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    def resolve_api_key(self) -> str:
        """Return the configured API key, falling back to the environment."""
        api_key = self.api_key or os.getenv(API_KEY_ENV_VAR)
        if not api_key:
            raise LoadAPIKeyError(
                f"Adaptive API key is missing. Pass it using the 'api_key' setting "
                f"or the {API_KEY_ENV_VAR} environment variable."
            )
        return api_key

    def build_headers(self) -> Dict[str, str]:
        """Headers sent with every request of this provider."""
        return {
            "Authorization": f"Bearer {self.resolve_api_key()}",
            "Content-Type": "application/json",
            **self.headers,
        }
