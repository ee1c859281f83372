"""Shared pytest fixtures for Adaptive LLM SDK tests."""

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from adaptive_llm_sdk.config.settings import ProviderSettings
from adaptive_llm_sdk.models.prompt import (
    AssistantMessage,
    CallOptions,
    SystemMessage,
    UserMessage,
)


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: end-to-end tests over a mocked HTTP transport")


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock environment variables for testing."""
    env_vars = {
        "ADAPTIVE_API_KEY": "test-adaptive-key",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("ADAPTIVE_BASE_URL", raising=False)
    monkeypatch.delenv("ADAPTIVE_TIMEOUT", raising=False)
    return env_vars


@pytest.fixture
def settings():
    """Provider settings pointing at a test backend."""
    return ProviderSettings(
        base_url="https://adaptive.test/v1",
        api_key="test-key",
        headers={"X-Test": "1"},
    )


@pytest.fixture
def sample_prompt():
    """Sample conversation prompt."""
    return [
        SystemMessage(content="You are a helpful assistant."),
        UserMessage(content="What is the weather like?"),
        AssistantMessage(content="I don't have access to real-time weather data."),
        UserMessage(content="Then tell me a joke."),
    ]


@pytest.fixture
def sample_call_options(sample_prompt):
    """Sample call options."""
    return CallOptions(
        prompt=sample_prompt,
        max_output_tokens=100,
        temperature=0.7,
        top_p=0.95,
    )


@pytest.fixture
def sample_chat_response() -> Dict[str, Any]:
    """Sample one-shot chat-completions response body."""
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4o-mini",
        "provider": "openai",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "Why did the chicken cross the road?"},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays canned responses."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last_body(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def mock_http():
    """Factory returning (handler, client) pairs backed by httpx.MockTransport."""
    clients: List[httpx.AsyncClient] = []

    def factory(responder: Callable[[httpx.Request], httpx.Response]):
        handler = RecordingHandler(responder)
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return handler, client

    return factory
