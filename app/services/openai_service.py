"""OpenAI-compatible service for embedding and chat completion calls."""

import asyncio
import logging
from typing import Any

import httpx

from app.config import Settings, settings
from app.utils.result import FailureReason, Outcome

logger = logging.getLogger(__name__)


class OpenAIService:
    """
    Client for an OpenAI-compatible API.

    The underlying HTTP client is created on first use, at most once per
    instance. Every public call returns an Outcome and never raises.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        embedding_model: str | None = None,
        chat_model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the OpenAI service.

        Args:
            api_key: Provider credential; without it every call reports CONFIG_ABSENT
            base_url: API base URL including the version prefix
            embedding_model: Model used for embeddings
            chat_model: Model used for chat completions
            timeout: Deadline in seconds for each provider call
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.api_key = api_key
        self.base_url = (base_url or settings.openai_base_url).rstrip("/")
        self.embedding_model = embedding_model or settings.embedding_model
        self.chat_model = chat_model or settings.chat_model
        self.timeout = timeout or settings.provider_timeout_seconds
        self._transport = transport

        self._client: httpx.AsyncClient | None = None
        self._init_lock = asyncio.Lock()
        self._init_failed = False

    @property
    def enabled(self) -> bool:
        """True when a credential is configured."""
        return bool(self.api_key)

    def _get_headers(self) -> dict[str, str]:
        """Get request headers including auth."""
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._get_headers(),
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _get_client(self) -> httpx.AsyncClient | None:
        """Return the shared client, creating it on first use."""
        if not self.enabled or self._init_failed:
            return None
        if self._client is not None:
            return self._client

        async with self._init_lock:
            if self._client is None and not self._init_failed:
                try:
                    self._client = self._build_client()
                    logger.info(f"Initialized OpenAI client for {self.base_url}")
                except Exception as e:
                    logger.error(f"Failed to initialize OpenAI client: {e}")
                    self._init_failed = True
        return self._client

    def _unavailable(self, operation: str) -> Outcome[Any]:
        if not self.enabled:
            logger.warning(f"Skipping {operation}: OpenAI features are disabled")
            return Outcome.failed(FailureReason.CONFIG_ABSENT, "No API key configured")
        return Outcome.failed(
            FailureReason.PROVIDER_ERROR, "OpenAI client could not be initialized"
        )

    async def _post(self, client: httpx.AsyncClient, path: str, payload: dict) -> dict:
        response = await asyncio.wait_for(
            client.post(path, json=payload), timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()

    async def check_connection(self) -> bool:
        """
        Check if the provider is reachable with the configured credential.

        Returns:
            True if connected, False otherwise
        """
        client = await self._get_client()
        if client is None:
            return False
        try:
            response = await asyncio.wait_for(client.get("/models"), timeout=5.0)
            return response.status_code == 200
        except Exception as e:
            logger.warning(f"OpenAI connection check failed: {e}")
            return False

    async def generate_embedding(self, text: str) -> Outcome[list[float]]:
        """
        Generate an embedding vector for text.

        Args:
            text: Text to embed

        Returns:
            Outcome holding the vector, or the reason none was produced
        """
        client = await self._get_client()
        if client is None:
            return self._unavailable("embedding generation")

        try:
            data = await self._post(
                client, "/embeddings", {"model": self.embedding_model, "input": text}
            )
        except (httpx.HTTPError, TimeoutError) as e:
            logger.error(f"Error generating embedding: {e!r}")
            return Outcome.failed(FailureReason.PROVIDER_ERROR, str(e))
        except ValueError as e:
            logger.error(f"Embedding response was not JSON: {e}")
            return Outcome.failed(FailureReason.PARSE_ERROR, str(e))
        except Exception as e:
            logger.error(f"Unexpected error generating embedding: {e!r}")
            return Outcome.failed(FailureReason.PROVIDER_ERROR, str(e))

        try:
            vector = [float(x) for x in data["data"][0]["embedding"]]
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Malformed embedding response: {e!r}")
            return Outcome.failed(FailureReason.PARSE_ERROR, "Malformed embedding response")

        if not vector:
            return Outcome.failed(FailureReason.PARSE_ERROR, "Empty embedding returned")
        return Outcome.success(vector)

    async def generate_chat_response(
        self,
        prompt: str,
        system_prompt: str | None = None,
        response_format: dict | None = None,
    ) -> Outcome[str]:
        """
        Run a single-turn chat completion.

        Args:
            prompt: User message
            system_prompt: Optional system message
            response_format: Optional OpenAI response_format (e.g. a JSON schema)

        Returns:
            Outcome holding the message content (possibly empty)
        """
        client = await self._get_client()
        if client is None:
            return self._unavailable("chat completion")

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        payload: dict[str, Any] = {"model": self.chat_model, "messages": messages}
        if response_format:
            payload["response_format"] = response_format

        try:
            data = await self._post(client, "/chat/completions", payload)
        except (httpx.HTTPError, TimeoutError) as e:
            logger.error(f"Error generating chat response: {e!r}")
            return Outcome.failed(FailureReason.PROVIDER_ERROR, str(e))
        except ValueError as e:
            logger.error(f"Chat response was not JSON: {e}")
            return Outcome.failed(FailureReason.PARSE_ERROR, str(e))
        except Exception as e:
            logger.error(f"Unexpected error generating chat response: {e!r}")
            return Outcome.failed(FailureReason.PROVIDER_ERROR, str(e))

        try:
            content = data["choices"][0]["message"].get("content") or ""
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            logger.error(f"Malformed chat response: {e!r}")
            return Outcome.failed(FailureReason.PARSE_ERROR, "Malformed chat response")
        return Outcome.success(content)

    async def aclose(self) -> None:
        """Close the HTTP client if it was created."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def get_openai_service(config: Settings | None = None, **overrides) -> OpenAIService:
    """
    Factory function to create an OpenAIService from settings.

    Args:
        config: Settings to read from, defaults to the process settings
        overrides: Keyword arguments passed straight to OpenAIService

    Returns:
        Configured OpenAIService instance
    """
    config = config or settings
    kwargs = {
        "api_key": config.openai_api_key,
        "base_url": config.openai_base_url,
        "embedding_model": config.embedding_model,
        "chat_model": config.chat_model,
        "timeout": config.provider_timeout_seconds,
    }
    kwargs.update(overrides)
    return OpenAIService(**kwargs)
