"""Prompt assembly for the chat endpoint.

Every chunk of every uploaded document is inlined into the system message.
Nothing is ranked or truncated, so the prompt grows with each upload.
"""

from collections.abc import Sequence
from typing import Any

from docchat.models.schemas import Chunk, Message

SYSTEM_PREAMBLE = "You are a helpful assistant. Use this context from the uploaded documents: "
CONTEXT_PREFIX = "Context from documents: "


def build_context(chunks: Sequence[Chunk]) -> str:
    """Join chunk texts with single spaces under the context prefix."""
    return CONTEXT_PREFIX + " ".join(chunk.text for chunk in chunks)


def build_messages(
    chunks: Sequence[Chunk],
    history: Sequence[Message],
    user_message: Message,
) -> list[Message]:
    """Assemble the message list sent to the model.

    Args:
        chunks: All chunks held by the session, in upload order.
        history: Prior conversation, oldest first. Not modified.
        user_message: The new user turn.

    Returns:
        System message, then the history, then the new user message.
    """
    system = Message(role="system", content=SYSTEM_PREAMBLE + build_context(chunks))
    return [system, *history, user_message]


def to_payload(model: str, messages: Sequence[Message]) -> dict[str, Any]:
    """Build the non-streaming ``/api/chat`` request body."""
    return {
        "model": model,
        "messages": [message.model_dump() for message in messages],
        "stream": False,
    }
