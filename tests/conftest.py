"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests:
settings pointing at in-memory SQLite, an isolated metrics registry, and
httpx.MockTransport based stubs of the OpenRouter API.
"""

from typing import Any, Callable, Optional, Union

import httpx
import pytest
from prometheus_client import CollectorRegistry

from quotebox.config import Settings
from quotebox.llm.openrouter_client import OpenRouterClient
from quotebox.monitoring.metrics import QuoteMetrics
from quotebox.retry.policy import RetryPolicy

SAMPLE_QUOTE = "Gratitude turns what we have into enough, and more."

UpstreamReply = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class UpstreamStub:
    """Scripted chat-completion endpoint for httpx.MockTransport.

    Each incoming request consumes the next scripted reply: either a ready
    httpx.Response or a callable taking the request (to inspect it or raise
    a transport error).
    """

    def __init__(self, *replies: UpstreamReply):
        self.replies = list(replies)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.replies:
            raise AssertionError(f"Unexpected upstream call #{len(self.requests)}")
        reply = self.replies.pop(0)
        if callable(reply):
            return reply(request)
        return reply

    @property
    def call_count(self) -> int:
        return len(self.requests)


class SleepRecorder:
    """Async stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.OPENROUTER_MODEL = "other/model"
    """
    return Settings(
        _env_file=None,
        # === Application ===
        APP_NAME="QuoteBox (Test)",
        APP_VERSION="0.1.0",
        ENVIRONMENT="development",
        LOG_LEVEL="DEBUG",

        # === OpenRouter ===
        OPENROUTER_API_KEY="test-key",
        OPENROUTER_MODEL="test-model",
        OPENROUTER_BASE_URL="https://openrouter.test/api/v1",

        # === Database ===
        DATABASE_URL="sqlite+aiosqlite:///:memory:",  # In-memory for tests
    )


@pytest.fixture
def metrics() -> QuoteMetrics:
    """Metrics recorder on a private registry (no cross-test leakage)."""
    return QuoteMetrics(registry=CollectorRegistry())


@pytest.fixture
def sample_quote() -> str:
    return SAMPLE_QUOTE


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def create_completion():
    """Factory fixture building chat-completion response bodies.

    Usage:
        def test_something(create_completion):
            body = create_completion(content="Short")
    """
    def _create(
        content: Optional[str] = SAMPLE_QUOTE,
        choices: Optional[list[dict[str, Any]]] = None,
        error: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "id": "gen-test-1",
            "model": "test-model",
            "choices": choices if choices is not None else [
                {
                    "message": {"role": "assistant", "content": content},
                    "finish_reason": "stop",
                }
            ],
        }
        if error is not None:
            body["error"] = error
        return body

    return _create


@pytest.fixture
def create_openrouter_client(test_settings: Settings, metrics: QuoteMetrics, sleep_recorder: SleepRecorder):
    """Factory fixture building an OpenRouterClient backed by an UpstreamStub.

    Usage:
        def test_something(create_openrouter_client):
            client, upstream = create_openrouter_client(httpx.Response(500))
    """
    def _create(*replies: UpstreamReply) -> tuple[OpenRouterClient, UpstreamStub]:
        upstream = UpstreamStub(*replies)
        client = OpenRouterClient(
            api_key=test_settings.OPENROUTER_API_KEY,
            metrics=metrics,
            model=test_settings.OPENROUTER_MODEL,
            base_url=test_settings.OPENROUTER_BASE_URL,
            retry_policy=RetryPolicy(sleep=sleep_recorder),
            transport=httpx.MockTransport(upstream),
        )
        return client, upstream

    return _create
