"""Headless Chromium adapter that rasterizes HTML documents to PDF.

Every ``render`` call walks the same states:

    UNSTARTED -> ENGINE_LAUNCHING -> PAGE_READY -> CONTENT_LOADED
              -> RENDERED -> ENGINE_CLOSED

The browser is owned by the call that launched it and is closed on every
exit path. Nothing is written to the output path unless rasterization
succeeded.
"""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
import time
from contextlib import asynccontextmanager
from enum import Enum
from pathlib import Path
from typing import Any, AsyncIterator, Optional, Union

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from ..domain.document import RenderDocument
from ..errors import (
    CvGenerationError,
    EngineLaunchError,
    InvalidOutputPathError,
    RenderError,
    RenderTimeoutError,
)
from ..observability import STAGE_CONTENT_PROCESSING, STAGE_GENERATION, STAGE_LAUNCH, PipelineObserver
from .options import EngineOptions, RenderOptions

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class RenderState(str, Enum):
    UNSTARTED = "unstarted"
    ENGINE_LAUNCHING = "engine_launching"
    PAGE_READY = "page_ready"
    CONTENT_LOADED = "content_loaded"
    RENDERED = "rendered"
    ENGINE_CLOSED = "engine_closed"


def validate_output_path(output_path: Optional[PathLike]) -> Path:
    """Check that *output_path* names a PDF file.

    Raises:
        InvalidOutputPathError: the path is empty or lacks a ``.pdf`` suffix.
    """
    if output_path is None or not isinstance(output_path, (str, os.PathLike)) or not str(output_path).strip():
        raise InvalidOutputPathError("Output path must be a valid string")

    path = Path(output_path)
    if path.suffix.lower() != ".pdf":
        raise InvalidOutputPathError("Output file must have .pdf extension", {"output_path": str(path)})
    return path


def _write_pdf(path: Path, data: bytes) -> None:
    """Write *data* next to *path* and move it into place in one step."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}-", suffix=".part")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class _RenderRun:
    """State of one ``render`` invocation."""

    def __init__(self, observer: PipelineObserver):
        self.observer = observer
        self.state = RenderState.UNSTARTED
        self._entered_at = time.perf_counter()

    def advance(self, state: RenderState) -> None:
        now = time.perf_counter()
        self.observer.log_render_state(state.value, duration_ms=(now - self._entered_at) * 1000)
        self.state = state
        self._entered_at = now


class PdfRenderer:
    """Render :class:`RenderDocument` objects to PDF files with Playwright/Chromium.

    A renderer holds only immutable options, so one instance may serve many
    concurrent ``render`` calls; each call launches and closes its own browser.
    """

    def __init__(
        self,
        engine_options: Optional[EngineOptions] = None,
        render_options: Optional[RenderOptions] = None,
    ):
        self.engine_options = engine_options or EngineOptions()
        self.render_options = render_options or RenderOptions()

    async def render(
        self,
        doc: RenderDocument,
        output_path: PathLike,
        options: Optional[RenderOptions] = None,
        observer: Optional[PipelineObserver] = None,
    ) -> Path:
        """Rasterize *doc* and write the PDF to *output_path*.

        Returns:
            The path of the written PDF.

        Raises:
            InvalidOutputPathError: before any browser resource is acquired.
            EngineLaunchError: Chromium or its page could not be started.
            RenderTimeoutError: content or rasterization exceeded the timeout.
            RenderError: any other rasterization failure.
        """
        path = validate_output_path(output_path)
        options = options or self.render_options
        observer = observer or PipelineObserver()
        run = _RenderRun(observer)

        try:
            async with self._engine(run) as page:
                await self._load_content(page, doc, options, run)
                await self._rasterize(page, path, options, run)
        except CvGenerationError as e:
            observer.log_error(e.code, e.message, e.details)
            raise
        return path

    @asynccontextmanager
    async def _engine(self, run: _RenderRun) -> AsyncIterator[Any]:
        """Launch Chromium, open one page, and release both on exit."""
        driver: Any = None
        browser: Any = None
        page: Any = None

        run.observer.log_stage(STAGE_LAUNCH, "Launching browser...")
        run.advance(RenderState.ENGINE_LAUNCHING)
        try:
            try:
                driver = await async_playwright().start()
                browser = await driver.chromium.launch(**self.engine_options.launch_kwargs())
                page = await browser.new_page()
            except Exception as e:
                raise EngineLaunchError(
                    "Failed to launch browser for PDF generation", {"reason": str(e)}
                ) from e
            run.advance(RenderState.PAGE_READY)
            yield page
        finally:
            await self._release(run, page, browser, driver)
            run.advance(RenderState.ENGINE_CLOSED)

    async def _release(self, run: _RenderRun, page: Any, browser: Any, driver: Any) -> None:
        """Close page, browser and driver; failures become warnings."""
        steps = (
            ("page", page, "close"),
            ("browser", browser, "close"),
            ("playwright driver", driver, "stop"),
        )
        for label, resource, method in steps:
            if resource is None:
                continue
            try:
                await getattr(resource, method)()
            except Exception as e:
                run.observer.log_warning(f"Warning: Failed to close {label}: {e}")

    async def _load_content(self, page: Any, doc: RenderDocument, options: RenderOptions, run: _RenderRun) -> None:
        run.observer.log_stage(STAGE_CONTENT_PROCESSING, "Processing content...")
        try:
            await page.set_content(doc.html, wait_until=options.wait_until, timeout=options.timeout_ms)
        except (PlaywrightTimeoutError, asyncio.TimeoutError) as e:
            raise RenderTimeoutError(
                f"Content did not reach '{options.wait_until}' within {options.timeout_ms}ms",
                {"wait_until": options.wait_until, "timeout_ms": options.timeout_ms},
            ) from e
        except PlaywrightError as e:
            raise RenderError(f"Error loading content: {e}") from e
        run.advance(RenderState.CONTENT_LOADED)

    async def _rasterize(self, page: Any, path: Path, options: RenderOptions, run: _RenderRun) -> None:
        run.observer.log_stage(STAGE_GENERATION, "Generating PDF...")
        timeout = options.timeout_ms / 1000 if options.timeout_ms else None
        try:
            pdf_bytes = await asyncio.wait_for(page.pdf(**options.pdf_kwargs()), timeout=timeout)
        except (PlaywrightTimeoutError, asyncio.TimeoutError) as e:
            raise RenderTimeoutError(
                f"PDF generation did not finish within {options.timeout_ms}ms",
                {"timeout_ms": options.timeout_ms},
            ) from e
        except Exception as e:
            raise RenderError(f"Error generating PDF: {e}") from e

        if not pdf_bytes:
            raise RenderError("Error generating PDF: rendering engine returned no data")

        try:
            _write_pdf(path, pdf_bytes)
        except OSError as e:
            raise RenderError(f"Error writing PDF: {e}", {"output_path": str(path)}) from e
        logger.debug("Wrote %d bytes to %s", len(pdf_bytes), path)
        run.advance(RenderState.RENDERED)
