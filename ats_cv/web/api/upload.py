"""Upload helpers for markdown files."""

from __future__ import annotations

from fastapi import UploadFile

from ...files import MARKDOWN_SUFFIX, SourceDocument
from ..errors import APIError

MARKDOWN_CONTENT_TYPES = ("text/markdown", "text/x-markdown")


async def read_upload_with_limit(file: UploadFile, max_bytes: int) -> bytes:
    """Read an upload stream with hard byte limit.

    The stream is consumed in chunks so oversized payloads are rejected
    before they are fully buffered.
    """
    chunks: list[bytes] = []
    total = 0
    chunk_size = 64 * 1024

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise APIError(
                422,
                "UPLOAD_TOO_LARGE",
                "Uploaded file exceeds size limit",
                {"max_upload_bytes": max_bytes},
            )
        chunks.append(chunk)

    return b"".join(chunks)


def is_markdown_upload(file: UploadFile) -> bool:
    filename = (file.filename or "").lower()
    content_type = (file.content_type or "").split(";")[0].strip().lower()
    return filename.endswith(MARKDOWN_SUFFIX) or content_type in MARKDOWN_CONTENT_TYPES


async def read_markdown_upload(file: UploadFile, max_bytes: int) -> SourceDocument:
    """Validate the upload type and size, then decode it as UTF-8 markdown.

    Raises:
        APIError: the upload is not markdown or exceeds *max_bytes*.
        InputError: the content is not valid UTF-8.
    """
    if not is_markdown_upload(file):
        raise APIError(
            400,
            "INVALID_FILE_TYPE",
            "Only markdown (.md) files are allowed",
            {"filename": file.filename, "content_type": file.content_type},
        )
    content = await read_upload_with_limit(file=file, max_bytes=max_bytes)
    return SourceDocument.from_bytes(content, origin=file.filename or "<upload>")
