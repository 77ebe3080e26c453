"""FastAPI dependencies shared by the routers."""

from typing import Annotated

from fastapi import Depends, HTTPException, status

from docchat.agent.session import (
    ChatSession,
    SessionManager,
    SessionNotFoundError,
    get_session_manager,
)

Manager = Annotated[SessionManager, Depends(get_session_manager)]


def get_session(session_id: str, manager: Manager) -> ChatSession:
    """Resolve the ``session_id`` path parameter to a session.

    Raises:
        HTTPException: 404 if the session does not exist.
    """
    try:
        return manager.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        ) from None


Session = Annotated[ChatSession, Depends(get_session)]


def busy_error(session_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Session {session_id} is busy processing another request",
    )
