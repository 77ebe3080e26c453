"""Pytest fixtures and shared test configuration.

Fixtures:
    - ollama_config: Deterministic configuration independent of the environment
    - fake_ollama: Recording stand-in for the Ollama chat endpoint
    - ollama_client: OllamaClient wired to fake_ollama
    - session_manager: SessionManager using ollama_client
    - async_client: HTTPX client for API testing
"""

import json
from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from docchat.agent.config import OllamaConfig
from docchat.agent.ollama_client import OllamaClient
from docchat.agent.session import SessionManager, get_session_manager
from docchat.api import app


class FakeOllama:
    """Records chat requests and answers them like Ollama's /api/chat.

    Set ``fail`` to make every request raise a connection error.
    """

    def __init__(self, reply: str = "Hello from the model") -> None:
        self.reply = reply
        self.fail = False
        self.requests: list[dict[str, Any]] = []
        self.urls: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.fail:
            raise httpx.ConnectError("Connection refused", request=request)
        self.urls.append(str(request.url))
        self.requests.append(json.loads(request.content))
        return httpx.Response(
            200,
            json={"model": "llama2", "message": {"role": "assistant", "content": self.reply}},
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def ollama_config() -> OllamaConfig:
    """Return configuration with the default model and chunking values."""
    return OllamaConfig(
        base_url="http://ollama.test",
        model_name="llama2",
        request_timeout=None,
        chunk_size=1000,
        chunk_overlap=200,
    )


@pytest.fixture
def fake_ollama() -> FakeOllama:
    return FakeOllama()


@pytest.fixture
def ollama_client(ollama_config: OllamaConfig, fake_ollama: FakeOllama) -> OllamaClient:
    return OllamaClient(config=ollama_config, transport=fake_ollama.transport)


@pytest.fixture
def session_manager(ollama_client: OllamaClient) -> SessionManager:
    return SessionManager(client=ollama_client)


@pytest.fixture
async def async_client(session_manager: SessionManager) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient whose app uses ``session_manager``.
    """
    app.dependency_overrides[get_session_manager] = lambda: session_manager
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
