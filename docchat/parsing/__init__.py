"""Document processing for the chat context.

Responsibilities:
    - Text extraction from TXT, PDF (pypdf), DOCX (python-docx) and DOC uploads
    - Fixed-size character chunking with overlap

Chunks carry no document boundary markers; every uploaded document ends up
in one flat, ordered sequence owned by the chat session.
"""

from docchat.parsing.chunker import chunk_text, merge_chunks
from docchat.parsing.document_parser import (
    ACCEPTED_TYPES,
    DocumentParseError,
    ExtractedDocument,
    UnsupportedDocumentError,
    extract_text,
)

__all__ = [
    "ACCEPTED_TYPES",
    "DocumentParseError",
    "ExtractedDocument",
    "UnsupportedDocumentError",
    "chunk_text",
    "extract_text",
    "merge_chunks",
]
