"""Provider options recognized by the Adaptive backend."""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class SemanticCacheOptions(BaseModel):
    """Semantic cache configuration forwarded to the backend."""
    model_config = ConfigDict(extra="ignore")

    enabled: Optional[bool] = None
    semantic_threshold: Optional[float] = None


class AdaptiveProviderOptions(BaseModel):
    """
    Provider options recognized by the Adaptive backend.

    Every non-null field is merged verbatim into the request body. Routing and
    caching values are opaque here; the backend interprets them.
    """
    model_config = ConfigDict(extra="ignore")

    logit_bias: Optional[Dict[str, float]] = Field(
        None, description="Token id to bias (-100 to 100) map"
    )
    n: Optional[int] = Field(None, description="Number of completions per prompt")
    user: Optional[str] = Field(None, description="Stable end-user identifier")
    cost_bias: Optional[float] = Field(None, description="Cost versus quality routing bias")
    semantic_cache: Optional[SemanticCacheOptions] = None
