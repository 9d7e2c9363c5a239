"""CV generation, preview and download APIs."""

from __future__ import annotations

import time
import uuid
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import FileResponse
from pydantic import BaseModel

from ....config import ServerConfig
from ....observability import PipelineObserver
from ....pipeline import CvGenerator
from ...errors import APIError
from ..deps import get_generator, get_server_config
from ..upload import read_markdown_upload
from .system import utc_timestamp

router = APIRouter(tags=["cv"])


class GenerateResponse(BaseModel):
    success: bool
    filename: str
    message: str
    download_url: str
    generated_at: str


class PreviewResponse(BaseModel):
    html: str


def _is_enabled(flag: Optional[str]) -> bool:
    # Anything but an explicit "false" keeps ATS optimization on.
    return (flag or "").strip().lower() != "false"


def _output_filename() -> str:
    return f"cv-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}.pdf"


@router.post("/generate", response_model=GenerateResponse)
async def generate_cv(
    markdown: UploadFile = File(...),
    optimize_ats: Optional[str] = Form(None),
    title: Optional[str] = Form(None),
    generator: CvGenerator = Depends(get_generator),
    settings: ServerConfig = Depends(get_server_config),
) -> GenerateResponse:
    source = await read_markdown_upload(markdown, settings.max_upload_bytes)
    filename = _output_filename()
    observer = PipelineObserver(run_id=filename[: -len(".pdf")])

    await generator.generate_from_text(
        source.text,
        Path(settings.upload_dir) / filename,
        title=title or None,
        optimize_ats=_is_enabled(optimize_ats),
        observer=observer,
    )
    return GenerateResponse(
        success=True,
        filename=filename,
        message="CV generated successfully",
        download_url=f"/api/download/{filename}",
        generated_at=utc_timestamp(),
    )


@router.post("/preview", response_model=PreviewResponse)
async def preview_cv(
    markdown: UploadFile = File(...),
    generator: CvGenerator = Depends(get_generator),
    settings: ServerConfig = Depends(get_server_config),
) -> PreviewResponse:
    source = await read_markdown_upload(markdown, settings.max_upload_bytes)
    return PreviewResponse(html=generator.preview_html(source.text))


@router.get("/download/{filename}")
async def download_pdf(
    filename: str,
    settings: ServerConfig = Depends(get_server_config),
) -> FileResponse:
    upload_dir = Path(settings.upload_dir).resolve()
    candidate = (upload_dir / filename).resolve()
    if (
        Path(filename).name != filename
        or candidate.suffix.lower() != ".pdf"
        or candidate.parent != upload_dir
        or not candidate.is_file()
    ):
        raise APIError(404, "NOT_FOUND", "File not found", {"filename": filename})
    return FileResponse(candidate, media_type="application/pdf", filename=filename)
