"""CV generation pipeline.

    markdown -> HTML fragment -> HTML document -> ATS-normalized document -> PDF

Each request gets its own :class:`PipelineObserver`; the generator itself
only holds immutable configuration and can serve concurrent requests.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import AppConfig
from .domain.ats import is_normalized, normalize
from .domain.document import RenderDocument, assemble
from .domain.markdown_parser import ParserOptions, parse
from .domain.styles import synthesize
from .errors import CvGenerationError
from .files import PathInput, load_source
from .observability import STAGE_COMPLETION, PipelineObserver
from .rendering.pdf_renderer import PdfRenderer, validate_output_path

logger = logging.getLogger(__name__)


class CvGenerator:
    """Professional ATS CV generator: converts markdown CVs to PDF."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        renderer: Optional[PdfRenderer] = None,
        parser_options: Optional[ParserOptions] = None,
    ):
        self.config = config or AppConfig()
        self.parser_options = parser_options or self.config.parser
        self.renderer = renderer or PdfRenderer(self.config.engine, self.config.render)
        self.stylesheet = synthesize(self.config.tokens)

    def preview_html(self, markdown_text: str) -> str:
        """Return the parsed HTML fragment without document chrome."""
        return parse(markdown_text, self.parser_options).html

    def build_document(
        self,
        markdown_text: str,
        title: Optional[str] = None,
        optimize_ats: bool = True,
    ) -> RenderDocument:
        """Parse, assemble and (optionally) ATS-normalize a document."""
        logger.debug("Parsing markdown content (%d chars)", len(markdown_text or ""))
        fragment = parse(markdown_text, self.parser_options)

        doc = assemble(
            fragment,
            self.stylesheet,
            title=title or self.config.document.title,
            description=self.config.document.description,
        )
        if optimize_ats and not is_normalized(doc):
            doc = normalize(doc)
        return doc

    async def generate_from_text(
        self,
        markdown_text: str,
        output_path: PathInput,
        title: Optional[str] = None,
        optimize_ats: bool = True,
        observer: Optional[PipelineObserver] = None,
    ) -> Path:
        """Run the full pipeline on markdown text and write the PDF.

        Raises:
            CvGenerationError: the first failing stage's typed error.
        """
        observer = observer or PipelineObserver()
        try:
            validate_output_path(output_path)
            doc = self.build_document(markdown_text, title=title, optimize_ats=optimize_ats)
        except CvGenerationError as e:
            observer.log_error(e.code, e.message, e.details)
            raise

        path = await self.renderer.render(doc, output_path, observer=observer)
        observer.log_stage(STAGE_COMPLETION, f"✓ PDF generated successfully: {path}", output_path=str(path))
        return path

    async def generate_cv_pdf(
        self,
        input_path: PathInput,
        output_path: PathInput,
        title: Optional[str] = None,
        optimize_ats: bool = True,
        observer: Optional[PipelineObserver] = None,
    ) -> Path:
        """Generate a CV PDF from a markdown file on disk."""
        observer = observer or PipelineObserver()
        logger.info("Reading markdown file: %s", input_path)
        try:
            source = load_source(input_path)
        except CvGenerationError as e:
            observer.log_error(e.code, e.message, e.details)
            raise
        return await self.generate_from_text(
            source.text, output_path, title=title, optimize_ats=optimize_ats, observer=observer
        )
