"""Chat endpoint.

Forwards a user turn with the full document context to Ollama and returns
the reply once it is complete.
"""

from fastapi import APIRouter

from docchat.agent.session import SessionBusyError
from docchat.api.deps import Session, busy_error
from docchat.models.schemas import ChatRequest, ChatResponse

router = APIRouter(prefix="/sessions", tags=["chat"])


@router.post("/{session_id}/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, session: Session) -> ChatResponse:
    """Send a message and wait for the assistant reply.

    Inference failures are not reported as HTTP errors; the reply then holds
    a fixed apology and the transcript records it like any other answer.

    Raises:
        404: Unknown session.
        409: Session busy.
        422: Empty or missing message.
    """
    try:
        reply = await session.send_message(request.message)
    except SessionBusyError as e:
        raise busy_error(session.session_id) from e

    return ChatResponse(session_id=session.session_id, reply=reply)
