"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docchat.api.chat import router as chat_router
from docchat.api.documents import router as documents_router
from docchat.api.sessions import router as sessions_router


def create_app() -> FastAPI:
    """Create the API with session, document and chat routes.

    CORS is open so the chat page can call the API when served from
    another port.
    """
    application = FastAPI(
        title="Document Chat API",
        description="Chat with uploaded TXT, PDF, DOC and DOCX files through a local Ollama model.",
        version="0.1.0",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in (sessions_router, documents_router, chat_router):
        application.include_router(router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "service": "docchat"}

    return application


app = create_app()
