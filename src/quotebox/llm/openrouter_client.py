"""
OpenRouter client implementation for quote generation.

Communicates with the OpenRouter chat-completion API using httpx AsyncClient.
Supports:
- Prompt construction via PromptBuilder
- Bounded retry (2 attempts, 500 ms pause, 429/5xx only) via RetryPolicy
- Upstream health reporting via QuoteMetrics
"""

import time
from typing import Optional

import httpx
import structlog
from pydantic import ValidationError

from quotebox.config import Settings
from quotebox.llm.base_client import BaseQuoteClient
from quotebox.llm.exceptions import (
    ConfigurationError,
    EmptyChoicesError,
    InvalidQuoteError,
    UpstreamAPIError,
    UpstreamConnectionError,
    UpstreamHTTPError,
    UpstreamResponseError,
)
from quotebox.llm.prompt_builder import PromptBuilder
from quotebox.models.llm_models import ChatCompletionRequest, ChatCompletionResponse
from quotebox.monitoring.metrics import QuoteMetrics
from quotebox.retry.policy import RetryPolicy

logger = structlog.get_logger(__name__)

DEFAULT_MODEL = "openrouter/auto"
DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
REQUEST_TIMEOUT_SECONDS = 30.0
MIN_QUOTE_LENGTH = 10


class OpenRouterClient(BaseQuoteClient):
    """
    OpenRouter-specific quote client using httpx for async HTTP communication.

    API Endpoints:
    - POST /chat/completions: OpenAI-compatible chat completion

    Features:
    - Connection pooling via persistent AsyncClient
    - Retry on 429/5xx only, strictly sequential
    - Upstream health gauge updated on every call
    """

    def __init__(
        self,
        api_key: str,
        metrics: QuoteMetrics,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        prompt_builder: Optional[PromptBuilder] = None,
        retry_policy: Optional[RetryPolicy] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize OpenRouter client.

        Args:
            api_key: OpenRouter API key (required)
            metrics: Metrics recorder receiving upstream health updates
            model: Model identifier
            base_url: API base URL
            prompt_builder: Prompt builder (default: packaged templates for ``model``)
            retry_policy: Retry policy (default: 2 attempts, 500 ms pause)
            transport: httpx transport override (tests use httpx.MockTransport)

        Raises:
            ConfigurationError: api_key is empty
        """
        if not api_key or not api_key.strip():
            raise ConfigurationError("OPENROUTER_API_KEY environment variable is required")

        super().__init__(base_url or DEFAULT_BASE_URL, REQUEST_TIMEOUT_SECONDS)

        self.api_key = api_key
        self.model = model or DEFAULT_MODEL
        self.metrics = metrics
        self.prompt_builder = prompt_builder or PromptBuilder(model=self.model)
        self.retry_policy = retry_policy or RetryPolicy()

        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        logger.info(
            "OpenRouter client initialized",
            base_url=self.base_url,
            model=self.model,
            timeout=self.timeout,
            max_attempts=self.retry_policy.max_attempts,
        )

    @classmethod
    def from_settings(cls, settings: Settings, metrics: QuoteMetrics) -> "OpenRouterClient":
        """Build a client from application settings."""
        return cls(
            api_key=settings.OPENROUTER_API_KEY,
            metrics=metrics,
            model=settings.OPENROUTER_MODEL,
            base_url=settings.OPENROUTER_BASE_URL,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def generate_quote(self, tag: str) -> str:
        """
        Generate a quote for ``tag``, retrying transient upstream failures.

        Sets the upstream health gauge to up on success and to down when the
        retry policy gives up, then re-raises the last error.
        """
        request = self.prompt_builder.build_request(tag)

        try:
            quote = await self.retry_policy.run(lambda: self.make_request(request))
        except Exception:
            self.metrics.set_upstream_status(False)
            raise

        self.metrics.set_upstream_status(True)
        return quote

    async def make_request(self, request: ChatCompletionRequest) -> str:
        """
        Perform a single chat-completion call.

        POST {base_url}/chat/completions with payload:
        {
            "model": "openrouter/auto",
            "messages": [{"role": "system", ...}, {"role": "user", ...}],
            "temperature": 0.8,
            "max_tokens": 150
        }

        Returns:
            Content of the first choice

        Raises:
            UpstreamConnectionError: Network/timeout errors
            UpstreamHTTPError: Non-2xx status
            UpstreamResponseError: Body is not a chat completion
            UpstreamAPIError: Body carries an error object
            EmptyChoicesError: No choices returned
            InvalidQuoteError: Content shorter than MIN_QUOTE_LENGTH
        """
        start_time = time.perf_counter()
        payload = request.model_dump(mode="json")

        logger.info(
            "Calling OpenRouter API",
            url=f"{self.base_url}/chat/completions",
            model=request.model,
        )

        try:
            client = await self._get_client()
            response = await client.post("/chat/completions", json=payload)
        except httpx.TimeoutException as e:
            raise UpstreamConnectionError(
                f"Request timeout after {self.timeout}s",
                details={"timeout": self.timeout, "error_type": type(e).__name__},
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamConnectionError(
                f"request failed: {e}",
                details={"error_type": type(e).__name__},
            ) from e

        latency_ms = int((time.perf_counter() - start_time) * 1000)

        if not response.is_success:
            logger.error(
                "OpenRouter API error",
                status_code=response.status_code,
                body=response.text,
                latency_ms=latency_ms,
            )
            raise UpstreamHTTPError(response.status_code, response.text)

        try:
            completion = ChatCompletionResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise UpstreamResponseError(
                "failed to unmarshal response",
                details={"parse_error": str(e)},
            ) from e

        if completion.error is not None:
            raise UpstreamAPIError(
                f"API error: {completion.error.message}",
                details={"type": completion.error.type, "code": completion.error.code},
            )

        if not completion.choices:
            raise EmptyChoicesError("no choices returned from API")

        quote = completion.choices[0].message.content or ""
        if len(quote) < MIN_QUOTE_LENGTH:
            logger.warning("Generated quote is too short or empty", quote=quote)
            raise InvalidQuoteError(
                "generated quote is invalid or too short",
                details={"length": len(quote)},
            )

        logger.info(
            "Successfully generated quote",
            model=completion.model or request.model,
            latency_ms=latency_ms,
            finish_reason=completion.choices[0].finish_reason,
        )
        return quote

    async def close(self) -> None:
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed OpenRouter client connection")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
