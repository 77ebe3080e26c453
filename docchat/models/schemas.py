from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Role = Literal["user", "assistant", "system"]


class SessionStatus(str, Enum):
    """Processing state of a chat session."""

    IDLE = "idle"
    BUSY = "busy"


class Message(BaseModel):
    """A single entry of the conversation.

    Attributes:
        role: The speaker (user, assistant, or system).
        content: The message text.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class Chunk(BaseModel):
    """A contiguous slice of an uploaded document.

    Attributes:
        text: The chunk text.
        start: Offset of the first character in the source document.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    start: int = Field(ge=0)


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        message: User's question or prompt.
    """

    message: str = Field(..., min_length=1)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ChatResponse(BaseModel):
    """Assistant reply for a chat turn.

    Attributes:
        session_id: Session the turn belongs to.
        reply: The assistant message appended to the transcript.
    """

    session_id: str
    reply: Message


class DocumentResult(BaseModel):
    """Outcome of processing one uploaded file.

    Attributes:
        filename: Name of the uploaded file.
        chunk_count: Number of chunks added to the session.
        success: Whether text was extracted from the file.
    """

    filename: str
    chunk_count: int = Field(ge=0)
    success: bool


class DocumentUploadResponse(BaseModel):
    """Response after a batch of documents was processed."""

    session_id: str
    documents: list[DocumentResult]
    total_chunks: int = Field(ge=0)


class SessionInfo(BaseModel):
    """Summary of a chat session.

    Attributes:
        session_id: Unique session identifier.
        files: Uploaded file names in upload order.
        message_count: Number of messages in the transcript.
        chunk_count: Number of chunks held for the session.
        status: Whether the session is idle or processing.
    """

    session_id: str
    files: list[str]
    message_count: int = Field(ge=0)
    chunk_count: int = Field(ge=0)
    status: SessionStatus
