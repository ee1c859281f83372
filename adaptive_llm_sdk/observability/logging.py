"""
Structured logging for provider chat models.

Every record carries ``provider=...`` plus whatever request fields the call
site knows (model, request_id, durations, token counts), rendered as a
bracketed ``key=value`` prefix:

    [provider=adaptive model= request_id=1a2b3c4d method=generate] Completed generate request
"""

import logging
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Sequence

from ..errors import ProviderError
from ..models.generation import CallWarning, Usage
from ..providers.errors import ErrorMapper


@dataclass
class RequestContext:
    """Identity and timing of one generate or stream call."""
    method: str
    model: str
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    started_at: float = field(default_factory=time.time)

    @property
    def elapsed_ms(self) -> int:
        return int((time.time() - self.started_at) * 1000)


class ProviderLogger:
    """Structured logger for one provider."""

    def __init__(self, provider_name: str):
        self.provider = provider_name
        self.logger = logging.getLogger(f"adaptive_llm_sdk.providers.{provider_name}")

    def _format_message(self, message: str, **fields: Any) -> str:
        parts = [f"provider={self.provider}"]
        parts.extend(f"{key}={value}" for key, value in fields.items() if value is not None)
        return f"[{' '.join(parts)}] {message}"

    def _log(self, level: int, message: str, **fields: Any) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, self._format_message(message, **fields))

    def debug(self, message: str, model: Optional[str] = None,
              request_id: Optional[str] = None, **fields: Any) -> None:
        self._log(logging.DEBUG, message, model=model, request_id=request_id, **fields)

    def info(self, message: str, model: Optional[str] = None,
             request_id: Optional[str] = None, **fields: Any) -> None:
        self._log(logging.INFO, message, model=model, request_id=request_id, **fields)

    def warning(self, message: str, model: Optional[str] = None,
                request_id: Optional[str] = None, **fields: Any) -> None:
        self._log(logging.WARNING, message, model=model, request_id=request_id, **fields)

    def error(self, message: str, model: Optional[str] = None,
              request_id: Optional[str] = None, error: Optional[BaseException] = None,
              **fields: Any) -> None:
        """
        Log an error; ``error`` contributes its type and message as fields.

        Provider errors also contribute their classification (status code,
        retryability, category).
        """
        if error is not None:
            fields["error_type"] = type(error).__name__
            fields["error_msg"] = str(error)
            if isinstance(error, ProviderError):
                classification = ErrorMapper.get_error_classification(error)
                classification.pop("provider", None)
                fields.update(classification)
        self._log(logging.ERROR, message, model=model, request_id=request_id, **fields)

    @contextmanager
    def track_request(self, method: str, model: str,
                      request_id: Optional[str] = None) -> Iterator[RequestContext]:
        """
        Time a call and log its start, completion or failure.

        Exceptions are logged and re-raised unchanged.

        Args:
            method: ``"generate"`` or ``"stream"``
            model: Model id of the call
            request_id: Request id to log under; generated when omitted

        Yields:
            RequestContext for the call
        """
        context = RequestContext(method=method, model=model)
        if request_id is not None:
            context.request_id = request_id

        self.debug(f"Starting {method} request", model=model,
                   request_id=context.request_id, method=method)
        try:
            yield context
        except Exception as e:
            self.error(f"Failed {method} request", model=model, request_id=context.request_id,
                       method=method, duration_ms=context.elapsed_ms, error=e)
            raise
        self.info(f"Completed {method} request", model=model, request_id=context.request_id,
                  method=method, duration_ms=context.elapsed_ms)

    def log_warnings(self, warnings: Sequence[CallWarning], model: str,
                     request_id: Optional[str] = None) -> None:
        """Log each call warning at debug level."""
        for warning in warnings:
            self.debug(
                "Call warning",
                model=model,
                request_id=request_id,
                warning_type=warning.type,
                setting=warning.setting,
                tool=warning.tool.get("name") if warning.tool else None,
                details=warning.message or warning.details,
            )

    def log_usage(self, usage: Usage, model: str, request_id: Optional[str] = None) -> None:
        self.info(
            "Token usage",
            model=model,
            request_id=request_id,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
            total_tokens=usage.total_tokens,
            reasoning_tokens=usage.reasoning_tokens or None,
            cached_input_tokens=usage.cached_input_tokens or None,
        )

    def log_streaming_metrics(self, chunks: int, error_chunks: int, duration: float,
                              model: str, request_id: Optional[str] = None) -> None:
        """Log chunk counts and throughput once a stream has been flushed."""
        self.debug(
            "Streaming metrics",
            model=model,
            request_id=request_id,
            chunks=chunks,
            error_chunks=error_chunks or None,
            duration_ms=int(duration * 1000),
            chunks_per_second=int(chunks / duration) if duration > 0 else 0,
        )
