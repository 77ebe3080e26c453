"""Session lifecycle endpoints.

Sessions live in memory for as long as the server runs.
"""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from docchat.agent.session import SessionBusyError, SessionNotFoundError
from docchat.api.deps import Manager, Session, busy_error
from docchat.models.schemas import Message, SessionInfo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionInfo, status_code=status.HTTP_201_CREATED)
async def create_session(manager: Manager) -> SessionInfo:
    """Start a new, empty chat session."""
    return manager.create().info()


@router.get("/{session_id}", response_model=SessionInfo)
async def get_session_info(session: Session) -> SessionInfo:
    """Return files, counts and busy state of a session."""
    return session.info()


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str, manager: Manager) -> Response:
    """Discard a session and everything it holds."""
    try:
        manager.delete(session_id)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        ) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{session_id}/messages", response_model=list[Message])
async def list_messages(session: Session) -> list[Message]:
    """Return the transcript, oldest message first."""
    return list(session.messages)


@router.post("/{session_id}/reset", response_model=SessionInfo)
async def reset_session(session: Session) -> SessionInfo:
    """Clear files, chunks and messages but keep the session id."""
    try:
        session.reset()
    except SessionBusyError as e:
        raise busy_error(session.session_id) from e
    logger.info(f"Reset session {session.session_id}")
    return session.info()
