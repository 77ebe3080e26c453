"""Document upload endpoint.

Handles file type validation and hands the batch to the session for text
extraction and chunking.
"""

import logging

from fastapi import APIRouter, HTTPException, UploadFile, status

from docchat.agent.session import SessionBusyError
from docchat.api.deps import Session, busy_error
from docchat.models.schemas import DocumentUploadResponse
from docchat.parsing.document_parser import ACCEPTED_TYPES, is_supported

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["documents"])


def _validate_file_extension(filename: str | None) -> str:
    """Validate that file has an accepted extension.

    Args:
        filename: The uploaded filename.

    Returns:
        The validated filename.

    Raises:
        HTTPException: 400 if the name is missing or the extension is not accepted.
    """
    if not filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Filename is required",
        )

    if not is_supported(filename):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Only {', '.join(ACCEPTED_TYPES)} files are accepted",
        )

    return filename


@router.post("/{session_id}/documents", response_model=DocumentUploadResponse)
async def upload_documents(files: list[UploadFile], session: Session) -> DocumentUploadResponse:
    """Upload one or more documents into a session.

    Files are processed in the order they were sent. A file that is empty,
    larger than 10MB, or unreadable is reported with ``success=False`` and
    adds no chunks; the other files of the batch are still processed.

    Args:
        files: Uploaded files (multipart/form-data, field ``files``).
        session: Target session.

    Returns:
        DocumentUploadResponse with per-file chunk counts.

    Raises:
        400: Missing filename or unsupported file type.
        404: Unknown session.
        409: Session busy.
    """
    names = [_validate_file_extension(file.filename) for file in files]
    uploads = [(name, await file.read()) for name, file in zip(names, files)]

    try:
        results = await session.add_documents(uploads)
    except SessionBusyError as e:
        raise busy_error(session.session_id) from e

    total = sum(result.chunk_count for result in results)
    logger.info(f"Ingested {len(results)} file(s) into session {session.session_id} ({total} chunks)")

    return DocumentUploadResponse(
        session_id=session.session_id,
        documents=results,
        total_chunks=total,
    )
