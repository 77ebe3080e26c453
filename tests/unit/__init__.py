"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: Text extraction and chunking logic
    - agent/: Configuration, prompt assembly, Ollama client, chat session
    - ui/: Markdown rendering helper
"""
