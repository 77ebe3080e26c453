"""FastAPI endpoints for document chat.

Endpoints:
    - GET /health: Service health status
    - POST /sessions: Create a chat session
    - GET /sessions/{id}: Session summary
    - DELETE /sessions/{id}: Discard a session
    - GET /sessions/{id}/messages: Transcript
    - POST /sessions/{id}/reset: Clear a session
    - POST /sessions/{id}/documents: Upload documents
    - POST /sessions/{id}/chat: Send a chat message
"""

from docchat.api.app import app, create_app

__all__ = ["app", "create_app"]
