"""Markdown to ATS CV Generator - professional, ATS-friendly PDF CVs from markdown."""

from .config import AppConfig, load_config
from .errors import (
    ContentProcessingError,
    CvGenerationError,
    EngineLaunchError,
    InputError,
    InvalidOutputPathError,
    RenderError,
    RenderTimeoutError,
)
from .pipeline import CvGenerator

__version__ = "1.0.0"

__all__ = [
    "AppConfig",
    "ContentProcessingError",
    "CvGenerationError",
    "CvGenerator",
    "EngineLaunchError",
    "InputError",
    "InvalidOutputPathError",
    "RenderError",
    "RenderTimeoutError",
    "load_config",
]
