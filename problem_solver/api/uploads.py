"""Upload staging for chat attachments.

Writes each uploaded file to a uniquely named temporary file so concurrent
requests never share a path. The prompt assembler deletes the file once the
request is finished.
"""

import logging
import uuid
from pathlib import Path

from fastapi import HTTPException, UploadFile, status

from problem_solver.assistant.prompt import StoredAttachment

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


async def _read_and_validate_size(file: UploadFile, max_bytes: int) -> bytes:
    """Read file content and validate size.

    Raises:
        HTTPException: 413 if file exceeds size limit.
    """
    content = await file.read()

    if len(content) > max_bytes:
        size_mb = len(content) / (1024 * 1024)
        limit_mb = max_bytes / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum allowed ({limit_mb:.0f}MB)",
        )

    return content


async def stage_upload(
    file: UploadFile,
    upload_dir: Path,
    max_bytes: int,
) -> StoredAttachment:
    """Write an uploaded file to the staging directory.

    Args:
        file: The multipart upload.
        upload_dir: Directory for temporary files.
        max_bytes: Size limit for the upload.

    Returns:
        StoredAttachment pointing at the staged file.

    Raises:
        HTTPException: 413 if the file is too large.
        OSError: If the file cannot be written. No partial file is left behind.
    """
    content = await _read_and_validate_size(file, max_bytes)

    original_name = file.filename or "attachment"
    upload_dir.mkdir(parents=True, exist_ok=True)
    path = upload_dir / f"{uuid.uuid4().hex}{Path(original_name).suffix}"
    try:
        path.write_bytes(content)
    except OSError:
        path.unlink(missing_ok=True)
        raise

    logger.info(f"Staged upload {original_name} ({len(content)} bytes) at {path}")
    return StoredAttachment(
        path=path,
        mime_type=file.content_type or DEFAULT_MIME_TYPE,
        original_name=original_name,
    )
