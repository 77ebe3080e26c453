"""Pydantic models for the chat session and API payloads.

Models:
    - Message: One conversation entry (user, assistant, or system)
    - Chunk: Slice of an uploaded document used as model context
    - SessionStatus: Idle/busy indicator of a session
    - ChatRequest / ChatResponse: Chat endpoint payloads
    - DocumentResult / DocumentUploadResponse: Upload endpoint payloads
    - SessionInfo: Session summary
"""

from docchat.models.schemas import (
    ChatRequest,
    ChatResponse,
    Chunk,
    DocumentResult,
    DocumentUploadResponse,
    Message,
    SessionInfo,
    SessionStatus,
)

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "Chunk",
    "DocumentResult",
    "DocumentUploadResponse",
    "Message",
    "SessionInfo",
    "SessionStatus",
]
