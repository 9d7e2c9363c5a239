"""API error helpers and exception handlers."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..errors import (
    ContentProcessingError,
    CvGenerationError,
    EngineLaunchError,
    InputError,
    InvalidOutputPathError,
    RenderError,
    RenderTimeoutError,
)

logger = logging.getLogger("ats_cv.web.api")

# Most specific classes first; RenderTimeoutError is a RenderError.
_PIPELINE_STATUS: tuple[tuple[Type[CvGenerationError], int], ...] = (
    (InputError, 400),
    (InvalidOutputPathError, 400),
    (ContentProcessingError, 422),
    (EngineLaunchError, 503),
    (RenderTimeoutError, 504),
    (RenderError, 500),
)


class APIError(Exception):
    """Application-level API error with status/code mapping."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


def status_for(exc: CvGenerationError) -> int:
    for error_type, status_code in _PIPELINE_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def api_error_handler(_: Request, exc: APIError) -> JSONResponse:
    """Render contract-compliant error response."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def pipeline_error_handler(request: Request, exc: CvGenerationError) -> JSONResponse:
    """Map typed pipeline errors to API error responses."""
    status_code = status_for(exc)
    logger.error("CV generation error path=%s code=%s: %s", request.url.path, exc.code, exc.message)
    return JSONResponse(
        status_code=status_code,
        content=APIError(status_code, exc.code, exc.message, exc.details).to_dict(),
    )


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Normalize FastAPI validation errors to API contract shape."""
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "BAD_REQUEST",
                "message": "Invalid request payload",
                "details": {"errors": exc.errors()},
            }
        },
    )
