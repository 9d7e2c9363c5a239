"""Service information, health and template download APIs."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse
from pydantic import BaseModel

from .... import __version__
from ....templates import template_path
from ...errors import APIError

router = APIRouter(tags=["system"])

TEMPLATE_DOWNLOAD_NAME = "cv-template.md"


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    uptime: float


class ApiInfoResponse(BaseModel):
    name: str
    version: str
    description: str
    endpoints: Dict[str, str]
    features: list[str]


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


async def api_info() -> ApiInfoResponse:
    """Endpoint documentation served at the API root."""
    return ApiInfoResponse(
        name="Markdown to ATS CV Generator API",
        version=__version__,
        description="Convert markdown CVs to ATS-optimized PDFs",
        endpoints={
            "GET /api/health": "Service health check",
            "GET /api/template": "Download the markdown CV template",
            "POST /api/generate": "Generate a PDF from an uploaded markdown file (field: markdown)",
            "POST /api/preview": "Preview the HTML for an uploaded markdown file (field: markdown)",
            "GET /api/download/{filename}": "Download a generated PDF",
        },
        features=[
            "ATS-optimized formatting",
            "Professional typography",
            "Print-ready A4 layout",
            "Section highlighting for summary and education",
        ],
    )


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        timestamp=utc_timestamp(),
        uptime=round(time.monotonic() - request.app.state.started_at, 3),
    )


@router.get("/template")
async def download_template() -> FileResponse:
    path = template_path()
    if not path.is_file():
        raise APIError(404, "NOT_FOUND", "Template file not found")
    return FileResponse(path, media_type="text/markdown", filename=TEMPLATE_DOWNLOAD_NAME)
