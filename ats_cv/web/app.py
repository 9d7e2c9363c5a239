"""FastAPI app entrypoint for the CV generation service."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from contextlib import asynccontextmanager
from dataclasses import replace
from pathlib import Path
from time import perf_counter
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from .. import __version__
from ..config import AppConfig, load_config
from ..errors import CvGenerationError
from ..pipeline import CvGenerator
from .api.router import api_router
from .cleanup import run_periodic_cleanup
from .errors import APIError, api_error_handler, pipeline_error_handler, validation_error_handler

logger = logging.getLogger("ats_cv.web.api")


def build_generator(config: AppConfig) -> CvGenerator:
    """Create the generator used for uploaded (untrusted) markdown."""
    parser_options = replace(
        config.parser,
        escape_raw_html=config.server.escape_raw_html or config.parser.escape_raw_html,
    )
    return CvGenerator(config, parser_options=parser_options)


def create_app(
    config: Optional[AppConfig] = None,
    generator: Optional[CvGenerator] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or load_config()
    generator = generator or build_generator(config)
    settings = config.server

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
        cleanup_task = asyncio.create_task(
            run_periodic_cleanup(
                settings.upload_dir,
                settings.cleanup_interval_seconds,
                settings.max_file_age_seconds,
            )
        )
        logger.info("CV generator service started upload_dir=%s", settings.upload_dir)
        try:
            yield
        finally:
            cleanup_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await cleanup_task

    app = FastAPI(title="Markdown to ATS CV Generator API", version=__version__, lifespan=lifespan)
    app.state.generator = generator
    app.state.server_config = settings
    app.state.started_at = time.monotonic()
    app.include_router(api_router)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        start = perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.info(
                "api_request method=%s path=%s status=%s duration_ms=%.2f",
                request.method,
                request.url.path,
                500,
                (perf_counter() - start) * 1000,
            )
            raise

        logger.info(
            "api_request method=%s path=%s status=%s duration_ms=%.2f",
            request.method,
            request.url.path,
            response.status_code,
            (perf_counter() - start) * 1000,
        )
        return response

    @app.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        return RedirectResponse(url="/api")

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(CvGenerationError, pipeline_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    return app


def main(config: Optional[AppConfig] = None, host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Run the API server."""
    import uvicorn

    config = config or load_config()
    uvicorn.run(
        create_app(config),
        host=host or config.server.host,
        port=port or config.server.port,
    )
