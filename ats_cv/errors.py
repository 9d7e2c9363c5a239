"""Error taxonomy for the CV generation pipeline.

Every pipeline stage raises one of these typed errors; the CLI and HTTP
shells map them to exit codes and status codes respectively.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class CvGenerationError(Exception):
    """Base class for all pipeline errors."""

    code = "CV_GENERATION_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class InputError(CvGenerationError):
    """Missing or invalid source document."""

    code = "INPUT_ERROR"


class ContentProcessingError(CvGenerationError):
    """Markdown content could not be converted to HTML."""

    code = "CONTENT_PROCESSING_ERROR"


class InvalidOutputPathError(CvGenerationError):
    """Output path is empty or does not name a PDF file."""

    code = "INVALID_OUTPUT_PATH"


class EngineLaunchError(CvGenerationError):
    """The headless browser or its page could not be started."""

    code = "ENGINE_LAUNCH_ERROR"


class RenderError(CvGenerationError):
    """Generic rasterization failure."""

    code = "RENDER_ERROR"


class RenderTimeoutError(RenderError):
    """Content never reached the configured load condition in time."""

    code = "RENDER_TIMEOUT"


class ConfigurationError(CvGenerationError):
    """Configuration file is unreadable or failed validation."""

    code = "CONFIGURATION_ERROR"
