"""HTTP client for a local Ollama server.

Sends one non-streaming ``POST /api/chat`` per call. There is no retry; a
timeout only applies when configured.
"""

import logging
from collections.abc import Sequence

import httpx

from docchat.agent.config import OllamaConfig, get_ollama_config
from docchat.agent.prompt import to_payload
from docchat.models.schemas import Message

logger = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"


class InferenceError(Exception):
    """Raised when the inference endpoint fails or returns an unusable reply."""

    pass


class OllamaClient:
    """Thin async wrapper around Ollama's chat endpoint."""

    def __init__(
        self,
        config: OllamaConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional configuration. Loads from environment if not provided.
            transport: Optional httpx transport, mainly for tests.
        """
        self._config = config or get_ollama_config()
        self._transport = transport

    @property
    def config(self) -> OllamaConfig:
        return self._config

    async def chat(self, messages: Sequence[Message]) -> str:
        """Send the conversation and return the assistant's reply text.

        Args:
            messages: Full message list, system message first.

        Returns:
            The reply content.

        Raises:
            InferenceError: On connection failure, HTTP error status, or a
                response without ``message.content``.
        """
        payload = to_payload(self._config.model_name, messages)
        url = f"{self._config.base_url}{CHAT_PATH}"

        async with httpx.AsyncClient(
            timeout=self._config.request_timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(url, json=payload)
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as e:
                raise InferenceError(f"HTTP {e.response.status_code} from {url}") from e
            except httpx.RequestError as e:
                raise InferenceError(f"Connection failed: {e}") from e
            except ValueError as e:
                raise InferenceError(f"Invalid JSON from {url}: {e}") from e

        try:
            content = data["message"]["content"]
        except (KeyError, TypeError) as e:
            raise InferenceError(f"Unexpected response shape from {url}") from e
        if not isinstance(content, str):
            raise InferenceError(f"Unexpected response shape from {url}")

        logger.debug(f"Received {len(content)} characters from {self._config.model_name}")
        return content
