"""Unit tests for prompt assembly."""

import pytest_check as check

from docchat.agent.prompt import (
    CONTEXT_PREFIX,
    SYSTEM_PREAMBLE,
    build_context,
    build_messages,
    to_payload,
)
from docchat.models.schemas import Chunk, Message


class TestBuildMessages:
    """Tests for build_messages ordering and content."""

    def test_empty_store_and_history_gives_two_entries(self) -> None:
        """System message with an empty context note, then the user message."""
        user = Message(role="user", content="What is this about?")

        messages = build_messages([], [], user)

        check.equal(len(messages), 2)
        check.equal(messages[0].role, "system")
        check.equal(messages[0].content, SYSTEM_PREAMBLE + CONTEXT_PREFIX)
        check.equal(messages[1], user)

    def test_output_is_system_history_then_user(self) -> None:
        """Length is 1 + history + 1 and history keeps its order."""
        history = [
            Message(role="user", content="first"),
            Message(role="assistant", content="second"),
            Message(role="user", content="third"),
            Message(role="assistant", content="fourth"),
        ]
        user = Message(role="user", content="fifth")

        messages = build_messages([Chunk(text="ctx", start=0)], history, user)

        check.equal(len(messages), len(history) + 2)
        check.equal(messages[0].role, "system")
        check.equal(messages[1:-1], history)
        check.equal(messages[-1], user)

    def test_chunks_are_space_joined_verbatim(self) -> None:
        """Every chunk appears in order, separated by single spaces."""
        chunks = [
            Chunk(text="alpha beta", start=0),
            Chunk(text="gamma", start=0),
            Chunk(text="delta\nepsilon", start=5),
        ]

        messages = build_messages(chunks, [], Message(role="user", content="q"))

        assert messages[0].content == (
            SYSTEM_PREAMBLE + CONTEXT_PREFIX + "alpha beta gamma delta\nepsilon"
        )

    def test_context_is_not_truncated(self) -> None:
        """Large stores are inlined in full."""
        chunks = [Chunk(text="x" * 1000, start=i * 800) for i in range(50)]

        context = build_context(chunks)

        assert len(context) == len(CONTEXT_PREFIX) + 50 * 1000 + 49

    def test_history_is_not_mutated(self) -> None:
        """The caller's history list is left untouched."""
        history = [Message(role="user", content="hi")]

        build_messages([], history, Message(role="user", content="again"))

        assert history == [Message(role="user", content="hi")]


class TestToPayload:
    """Tests for the Ollama request body."""

    def test_payload_shape(self) -> None:
        """Body carries model, role/content pairs and stream=false."""
        messages = [
            Message(role="system", content="sys"),
            Message(role="user", content="hello"),
        ]

        payload = to_payload("llama2", messages)

        assert payload == {
            "model": "llama2",
            "messages": [
                {"role": "system", "content": "sys"},
                {"role": "user", "content": "hello"},
            ],
            "stream": False,
        }
