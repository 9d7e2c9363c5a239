"""Source document acquisition: file validation and UTF-8 reading."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .errors import InputError

MARKDOWN_SUFFIX = ".md"

PathInput = Union[str, Path]


@dataclass(frozen=True)
class SourceDocument:
    """Raw markdown text plus where it came from."""

    text: str
    origin: str = "<string>"

    @classmethod
    def from_bytes(cls, data: bytes, origin: str = "<upload>") -> "SourceDocument":
        try:
            return cls(text=data.decode("utf-8"), origin=origin)
        except UnicodeDecodeError as e:
            raise InputError(f"Error reading file: {origin} is not valid UTF-8 text") from e


def file_exists(file_path: PathInput) -> bool:
    return Path(file_path).exists()


def validate_markdown_file(file_path: PathInput) -> Path:
    """Check that *file_path* exists and has a markdown extension.

    Raises:
        InputError: the file is missing or is not a ``.md`` file.
    """
    path = Path(file_path)
    if not path.exists():
        raise InputError(f'Error: File "{file_path}" does not exist', {"path": str(file_path)})
    if path.suffix.lower() != MARKDOWN_SUFFIX:
        raise InputError("Error: Input file must be a markdown (.md) file", {"path": str(file_path)})
    return path


def read_file_content(file_path: PathInput, encoding: str = "utf-8") -> str:
    """Read a text file, converting OS and decoding errors to :class:`InputError`."""
    try:
        return Path(file_path).read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Error reading file: {e}", {"path": str(file_path)}) from e


def load_source(file_path: PathInput) -> SourceDocument:
    """Validate and read a markdown file."""
    path = validate_markdown_file(file_path)
    return SourceDocument(text=read_file_content(path), origin=str(path))
