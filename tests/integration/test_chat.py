"""Integration tests for the chat endpoint."""

import pytest
from httpx import AsyncClient

from docchat.agent.prompt import CONTEXT_PREFIX
from docchat.agent.session import ERROR_REPLY, SessionManager
from docchat.models.schemas import ChatResponse, SessionStatus
from tests.conftest import FakeOllama


@pytest.fixture
async def session_id(async_client: AsyncClient) -> str:
    return (await async_client.post("/sessions")).json()["session_id"]


class TestChatEndpoint:
    """Tests for POST /sessions/{id}/chat."""

    async def test_chat_returns_assistant_reply(
        self, async_client: AsyncClient, session_id: str
    ) -> None:
        response = await async_client.post(
            f"/sessions/{session_id}/chat", json={"message": "Hello"}
        )

        assert response.status_code == 200
        data = ChatResponse.model_validate(response.json())
        assert data.session_id == session_id
        assert data.reply.role == "assistant"
        assert data.reply.content == "Hello from the model"

    async def test_transcript_records_both_turns(
        self, async_client: AsyncClient, session_id: str
    ) -> None:
        await async_client.post(f"/sessions/{session_id}/chat", json={"message": "Hello"})

        messages = (await async_client.get(f"/sessions/{session_id}/messages")).json()

        assert messages == [
            {"role": "user", "content": "Hello"},
            {"role": "assistant", "content": "Hello from the model"},
        ]

    async def test_message_is_stripped(
        self, async_client: AsyncClient, session_id: str, fake_ollama: FakeOllama
    ) -> None:
        await async_client.post(f"/sessions/{session_id}/chat", json={"message": "  padded  "})

        assert fake_ollama.requests[0]["messages"][-1]["content"] == "padded"

    async def test_uploaded_documents_are_sent_as_context(
        self, async_client: AsyncClient, session_id: str, fake_ollama: FakeOllama
    ) -> None:
        """Upload then chat: the system message carries every chunk."""
        await async_client.post(
            f"/sessions/{session_id}/documents",
            files=[
                ("files", ("a.txt", b"The launch is on Monday.", "text/plain")),
                ("files", ("b.txt", b"Budget is 42k.", "text/plain")),
            ],
        )

        await async_client.post(f"/sessions/{session_id}/chat", json={"message": "When?"})

        sent = fake_ollama.requests[0]
        assert sent["model"] == "llama2"
        assert sent["stream"] is False
        assert sent["messages"][0]["role"] == "system"
        assert sent["messages"][0]["content"].endswith(
            CONTEXT_PREFIX + "The launch is on Monday. Budget is 42k."
        )

    async def test_endpoint_failure_returns_fixed_reply(
        self,
        async_client: AsyncClient,
        session_id: str,
        fake_ollama: FakeOllama,
        session_manager: SessionManager,
    ) -> None:
        """Connection refused yields one assistant apology and an idle session."""
        fake_ollama.fail = True

        response = await async_client.post(
            f"/sessions/{session_id}/chat", json={"message": "Anyone there?"}
        )

        assert response.status_code == 200
        assert response.json()["reply"]["content"] == ERROR_REPLY

        session = session_manager.get(session_id)
        assert [m.role for m in session.messages] == ["user", "assistant"]
        assert session.status == SessionStatus.IDLE

    async def test_empty_message_returns_422(
        self, async_client: AsyncClient, session_id: str
    ) -> None:
        response = await async_client.post(f"/sessions/{session_id}/chat", json={"message": ""})

        assert response.status_code == 422

    async def test_whitespace_only_message_returns_422(
        self, async_client: AsyncClient, session_id: str
    ) -> None:
        response = await async_client.post(f"/sessions/{session_id}/chat", json={"message": "   "})

        assert response.status_code == 422

    async def test_missing_message_returns_422(
        self, async_client: AsyncClient, session_id: str
    ) -> None:
        response = await async_client.post(f"/sessions/{session_id}/chat", json={})

        assert response.status_code == 422

    async def test_busy_session_returns_409(
        self,
        async_client: AsyncClient,
        session_id: str,
        session_manager: SessionManager,
    ) -> None:
        session = session_manager.get(session_id)
        session._acquire()

        response = await async_client.post(
            f"/sessions/{session_id}/chat", json={"message": "Hello"}
        )

        assert response.status_code == 409
        session._release()

    async def test_unknown_session_returns_404(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/sessions/does-not-exist/chat", json={"message": "Hello"}
        )

        assert response.status_code == 404
