"""Document Chat - ask a local Ollama model about uploaded documents.

Combines FastAPI for the HTTP API, httpx for the Ollama client,
NiceGUI for the browser interface, and Pydantic for data validation.

Components:
    - api: HTTP endpoints for sessions, uploads and chat
    - agent: Configuration, prompt assembly, inference client, session state
    - parsing: Text extraction and chunking
    - ui: Web interface for chat interactions
    - models: Data model and request/response schemas
"""

__version__ = "0.1.0"
