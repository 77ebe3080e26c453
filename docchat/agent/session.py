"""Chat session state and the in-memory session registry.

Core module for document ingestion and conversation handling.

Design notes:

1. **Explicit session object** - Uploaded file names, the transcript and the
   chunk store live on one ``ChatSession`` per page. The chunker and the prompt
   assembler receive that state as arguments and never reach for globals.

2. **Two-state status** - A session is either idle or busy. The flag is checked
   and set before the first ``await``, so on a single event loop a second
   operation is rejected instead of interleaving with the first.

3. **Sequential ingestion** - Files of one upload are extracted and chunked one
   after another, and their chunks are appended in upload order. A file that
   cannot be read is logged and skipped; the rest of the batch continues.

4. **Full-context prompts** - Every chunk is sent with every turn. This grows
   without bound; a retrieval step over ``chunks`` is the place to bound it.

5. **Singleton registry** - Sessions are held in memory only and vanish with the
   process. The manager is created lazily on first use and shared by all routes.
"""

import logging
import uuid
from collections.abc import Sequence

from docchat.agent.ollama_client import InferenceError, OllamaClient
from docchat.agent.prompt import build_messages
from docchat.models.schemas import (
    Chunk,
    DocumentResult,
    Message,
    SessionInfo,
    SessionStatus,
)
from docchat.parsing.chunker import chunk_text
from docchat.parsing.document_parser import DocumentParseError, extract_text

logger = logging.getLogger(__name__)

ERROR_REPLY = "Sorry, I encountered an error while processing your request."


class SessionBusyError(Exception):
    """Raised when a session is asked to do work while another operation runs."""

    pass


class SessionNotFoundError(KeyError):
    """Raised when a session id is unknown."""

    pass


class ChatSession:
    """Documents, transcript and processing state of one chat page."""

    def __init__(self, client: OllamaClient, session_id: str | None = None) -> None:
        self.session_id: str = session_id or str(uuid.uuid4())
        self.files: list[str] = []
        self.messages: list[Message] = []
        self.chunks: list[Chunk] = []
        self.status: SessionStatus = SessionStatus.IDLE
        self._client = client

    @property
    def is_busy(self) -> bool:
        return self.status is SessionStatus.BUSY

    def _acquire(self) -> None:
        if self.is_busy:
            raise SessionBusyError(f"Session {self.session_id} is already processing")
        self.status = SessionStatus.BUSY

    def _release(self) -> None:
        self.status = SessionStatus.IDLE

    def _ingest(self, filename: str, content: bytes) -> DocumentResult:
        """Extract and chunk one file, appending its chunks to the store."""
        try:
            document = extract_text(filename, content)
        except DocumentParseError as e:
            logger.warning(f"Failed to process {filename}: {e}")
            return DocumentResult(filename=filename, chunk_count=0, success=False)

        config = self._client.config
        chunks = chunk_text(document.text, config.chunk_size, config.chunk_overlap)
        self.chunks.extend(chunks)
        logger.info(f"Added {len(chunks)} chunks from {filename}")
        return DocumentResult(filename=filename, chunk_count=len(chunks), success=True)

    async def add_documents(self, uploads: Sequence[tuple[str, bytes]]) -> list[DocumentResult]:
        """Add uploaded files to the session.

        Every file name is recorded. Files are processed one at a time in the
        given order; unreadable files contribute no chunks.

        Args:
            uploads: ``(filename, content)`` pairs in upload order.

        Returns:
            One result per file, in the same order.

        Raises:
            SessionBusyError: If another operation is in progress.
        """
        self._acquire()
        try:
            self.files.extend(filename for filename, _ in uploads)
            return [self._ingest(filename, content) for filename, content in uploads]
        finally:
            self._release()

    async def send_message(self, text: str) -> Message:
        """Send a user message and append the assistant reply.

        The user message joins the transcript before the request is made. A
        failed request is answered with a fixed assistant error message.

        Args:
            text: The user's message.

        Returns:
            The assistant message appended to the transcript.

        Raises:
            ValueError: If the message is blank.
            SessionBusyError: If another operation is in progress.
        """
        if not text or not text.strip():
            raise ValueError("Message must not be empty")
        self._acquire()
        try:
            user_message = Message(role="user", content=text)
            prompt = build_messages(self.chunks, self.messages, user_message)
            self.messages.append(user_message)

            try:
                content = await self._client.chat(prompt)
            except InferenceError as e:
                logger.error(f"Error getting response for session {self.session_id}: {e}")
                content = ERROR_REPLY

            reply = Message(role="assistant", content=content)
            self.messages.append(reply)
            return reply
        finally:
            self._release()

    def reset(self) -> None:
        """Forget all files, chunks and messages.

        Raises:
            SessionBusyError: If another operation is in progress.
        """
        if self.is_busy:
            raise SessionBusyError(f"Session {self.session_id} is already processing")
        self.files.clear()
        self.messages.clear()
        self.chunks.clear()

    def info(self) -> SessionInfo:
        return SessionInfo(
            session_id=self.session_id,
            files=list(self.files),
            message_count=len(self.messages),
            chunk_count=len(self.chunks),
            status=self.status,
        )


class SessionManager:
    """In-memory registry of chat sessions sharing one inference client."""

    def __init__(self, client: OllamaClient | None = None) -> None:
        """Initialize the registry.

        Args:
            client: Optional inference client. Built from environment if not provided.
        """
        self._client = client or OllamaClient()
        self._sessions: dict[str, ChatSession] = {}

    def create(self) -> ChatSession:
        session = ChatSession(self._client)
        self._sessions[session.session_id] = session
        logger.info(f"Created session {session.session_id}")
        return session

    def get(self, session_id: str) -> ChatSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def delete(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)
        logger.info(f"Deleted session {session_id}")

    def __len__(self) -> int:
        return len(self._sessions)


# Module-level singleton instance
_session_manager: SessionManager | None = None


def get_session_manager() -> SessionManager:
    """Get or create the global session manager.

    Returns:
        The SessionManager instance.
    """
    global _session_manager
    if _session_manager is None:
        _session_manager = SessionManager()
    return _session_manager
