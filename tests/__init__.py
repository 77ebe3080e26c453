"""Test package for Document Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: API workflow tests through the ASGI app

The Ollama server is never contacted: requests go to an httpx.MockTransport.
Leverages pytest with pytest-check for soft assertions.
"""
