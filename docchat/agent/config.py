"""Inference and chunking configuration with environment variable loading.

Pydantic-based configuration for the Ollama chat client and the chunker.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# Load environment variables from .env file
load_dotenv()


def _optional_float(name: str) -> float | None:
    value = os.getenv(name, "").strip()
    return float(value) if value else None


class OllamaConfig(BaseModel):
    """Configuration for the Ollama chat client and document chunking.

    Attributes:
        base_url: Ollama server address.
        model_name: Model identifier sent with every request.
        request_timeout: Seconds to wait for a reply (None waits indefinitely).
        chunk_size: Maximum characters per document chunk.
        chunk_overlap: Characters shared between consecutive chunks.
    """

    base_url: str = Field(
        default_factory=lambda: os.getenv("OLLAMA_BASE_URL", "http://localhost:11434"),
        description="Ollama server base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("OLLAMA_MODEL", "llama2"),
        description="Model to use",
    )
    request_timeout: float | None = Field(
        default_factory=lambda: _optional_float("OLLAMA_TIMEOUT"),
        gt=0,
        description="Request timeout in seconds (None disables the timeout)",
    )
    chunk_size: int = Field(
        default_factory=lambda: int(os.getenv("CHUNK_SIZE", "1000")),
        ge=1,
        description="Maximum characters per chunk",
    )
    chunk_overlap: int = Field(
        default_factory=lambda: int(os.getenv("CHUNK_OVERLAP", "200")),
        ge=0,
        description="Characters shared between consecutive chunks",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require a base URL and drop any trailing slash."""
        if not v or not v.strip():
            raise ValueError("Base URL required. Set OLLAMA_BASE_URL in .env")
        return v.strip().rstrip("/")

    @field_validator("model_name")
    @classmethod
    def validate_model_name(cls, v: str) -> str:
        """Validate that a model name is provided."""
        if not v or not v.strip():
            raise ValueError("Model name required. Set OLLAMA_MODEL in .env")
        return v.strip()

    @model_validator(mode="after")
    def validate_overlap(self) -> "OllamaConfig":
        """Overlap must leave room for new text in every chunk."""
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        return self


def get_ollama_config() -> OllamaConfig:
    """Create configuration from environment.

    Returns:
        Configured OllamaConfig instance.

    Raises:
        ValueError: If the environment holds invalid values.
    """
    return OllamaConfig()
