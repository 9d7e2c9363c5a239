"""PDF rendering through headless Chromium."""

from .options import EngineOptions, PageMargin, RenderOptions
from .pdf_renderer import PdfRenderer, RenderState, validate_output_path

__all__ = [
    "EngineOptions",
    "PageMargin",
    "PdfRenderer",
    "RenderOptions",
    "RenderState",
    "validate_output_path",
]
