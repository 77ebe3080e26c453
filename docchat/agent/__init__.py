"""Chat logic between uploaded documents and the Ollama server.

Responsibilities:
    - Configuration of the inference endpoint and chunking
    - Prompt assembly from chunks and conversation history
    - Single-shot requests to Ollama's chat API
    - Per-page session state (files, transcript, chunks, busy flag)

Maintains clean separation from the HTTP and UI layers.
"""

from docchat.agent.config import OllamaConfig, get_ollama_config
from docchat.agent.ollama_client import InferenceError, OllamaClient
from docchat.agent.prompt import build_messages, to_payload
from docchat.agent.session import (
    ERROR_REPLY,
    ChatSession,
    SessionBusyError,
    SessionManager,
    SessionNotFoundError,
    get_session_manager,
)

__all__ = [
    "ERROR_REPLY",
    "ChatSession",
    "InferenceError",
    "OllamaClient",
    "OllamaConfig",
    "SessionBusyError",
    "SessionManager",
    "SessionNotFoundError",
    "build_messages",
    "get_ollama_config",
    "get_session_manager",
    "to_payload",
]
