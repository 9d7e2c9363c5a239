"""Bundled markdown CV template."""

from pathlib import Path

_TEMPLATE_DIR = Path(__file__).parent

TEMPLATE_FILENAME = "cv_template.md"


def template_path() -> Path:
    """Path of the packaged markdown CV template."""
    return _TEMPLATE_DIR / TEMPLATE_FILENAME


def load_template() -> str:
    return template_path().read_text(encoding="utf-8")
