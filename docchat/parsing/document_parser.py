"""Document text extraction for uploaded files.

Supports plain text, PDF (pypdf), DOCX (python-docx) and legacy DOC files.
Legacy DOC has no parser and is decoded as raw bytes.
"""

import io
import logging
from pathlib import PurePath

import docx
from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"

# Extension -> MIME type accepted for upload
ACCEPTED_TYPES: dict[str, str] = {
    ".txt": "text/plain",
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class ExtractedDocument(BaseModel):
    """Text extracted from an uploaded file.

    Attributes:
        filename: Original file name.
        kind: Lower-case extension without the dot (txt, pdf, doc, docx).
        text: Extracted text content.
        pages: Page count for PDFs, 1 for other formats.
    """

    filename: str
    kind: str
    text: str
    pages: int = Field(ge=0)


class DocumentParseError(Exception):
    """Raised when text cannot be extracted from a document."""

    pass


class UnsupportedDocumentError(DocumentParseError):
    """Raised for files whose type is not accepted."""

    pass


def document_kind(filename: str) -> str:
    """Return the accepted extension of ``filename`` without the dot.

    Raises:
        UnsupportedDocumentError: If the extension is not accepted.
    """
    suffix = PurePath(filename).suffix.lower()
    if suffix not in ACCEPTED_TYPES:
        accepted = ", ".join(ACCEPTED_TYPES)
        raise UnsupportedDocumentError(
            f"Unsupported file type '{suffix or filename}'. Accepted: {accepted}"
        )
    return suffix.lstrip(".")


def is_supported(filename: str | None) -> bool:
    """Check whether a file name carries an accepted extension."""
    if not filename:
        return False
    return PurePath(filename).suffix.lower() in ACCEPTED_TYPES


def _validate_size(file_content: bytes) -> None:
    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise DocumentParseError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")


def _extract_pdf(file_content: bytes) -> tuple[str, int]:
    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise DocumentParseError("Invalid PDF: file does not start with PDF header")

    try:
        reader = PdfReader(io.BytesIO(file_content))
    except PdfReadError as e:
        raise DocumentParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise DocumentParseError(f"Failed to read PDF: {e}") from e

    try:
        pages = len(reader.pages)
    except Exception as e:
        raise DocumentParseError(f"Corrupt or invalid PDF: {e}") from e
    if pages == 0:
        raise DocumentParseError("PDF contains no pages")

    text_parts: list[str] = []
    for i, page in enumerate(reader.pages):
        try:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            continue

    text = "\n\n".join(text_parts)
    if not text.strip():
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return text, pages


def _extract_docx(file_content: bytes) -> str:
    try:
        document = docx.Document(io.BytesIO(file_content))
    except Exception as e:
        raise DocumentParseError(f"Corrupt or invalid DOCX: {e}") from e

    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def extract_text(filename: str, file_content: bytes) -> ExtractedDocument:
    """Extract the text of an uploaded file.

    Args:
        filename: Original file name, used to pick the extractor.
        file_content: Raw bytes of the file.

    Returns:
        ExtractedDocument with the text and page count.

    Raises:
        UnsupportedDocumentError: If the file type is not accepted.
        DocumentParseError: If the file is empty, too large, or corrupt.
    """
    kind = document_kind(filename)

    if not file_content:
        raise DocumentParseError("Empty file provided")
    _validate_size(file_content)

    pages = 1
    if kind == "pdf":
        text, pages = _extract_pdf(file_content)
    elif kind == "docx":
        text = _extract_docx(file_content)
    elif kind == "doc":
        logger.warning(f"No parser for legacy Word file {filename}; reading raw bytes as text")
        text = file_content.decode("utf-8", errors="ignore")
    else:
        text = file_content.decode("utf-8", errors="replace")

    logger.debug(f"Extracted {len(text)} characters from {filename}")
    return ExtractedDocument(filename=filename, kind=kind, text=text, pages=pages)
