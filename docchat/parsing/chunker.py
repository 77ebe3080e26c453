"""Fixed-size character chunking with overlap.

Boundaries are purely positional and may cut through words.
"""

from docchat.models.schemas import Chunk

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 200


def _validate_params(chunk_size: int, chunk_overlap: int) -> None:
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if chunk_overlap < 0:
        raise ValueError(f"chunk_overlap must not be negative, got {chunk_overlap}")
    if chunk_overlap >= chunk_size:
        raise ValueError(
            f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})"
        )


def chunk_text(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[Chunk]:
    """Split text into overlapping chunks of at most ``chunk_size`` characters.

    Windows start every ``chunk_size - chunk_overlap`` characters, so each
    chunk repeats the last ``chunk_overlap`` characters of its predecessor.
    The final chunk may be shorter and overlap less.

    Args:
        text: Full document text.
        chunk_size: Maximum chunk length.
        chunk_overlap: Characters shared with the previous chunk.

    Returns:
        Chunks in document order. Empty text yields no chunks.

    Raises:
        ValueError: If the size/overlap combination is invalid.
    """
    _validate_params(chunk_size, chunk_overlap)

    if not text:
        return []
    if len(text) <= chunk_size:
        return [Chunk(text=text, start=0)]

    step = chunk_size - chunk_overlap
    return [
        Chunk(text=text[start : start + chunk_size], start=start)
        for start in range(0, len(text), step)
    ]


def merge_chunks(chunks: list[Chunk], chunk_overlap: int = DEFAULT_CHUNK_OVERLAP) -> str:
    """Rebuild the source text from chunks produced by :func:`chunk_text`.

    Args:
        chunks: Chunks of a single document, in order.
        chunk_overlap: Overlap used when the chunks were created.

    Returns:
        The original document text.
    """
    if not chunks:
        return ""
    return chunks[0].text + "".join(chunk.text[chunk_overlap:] for chunk in chunks[1:])
