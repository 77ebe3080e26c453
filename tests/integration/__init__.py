"""Integration tests for the HTTP API.

Runs the real FastAPI app through ASGITransport with a session manager whose
Ollama client talks to an in-process mock endpoint.
"""
