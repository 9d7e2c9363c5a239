"""Configuration validator for startup checks."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, List

from .domain.sections import KNOWN_ROLES
from .domain.styles import StyleTokens
from .rendering.options import PAPER_FORMATS, WAIT_CONDITIONS, EngineOptions, RenderOptions


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigError:
    """A single configuration issue."""
    field: str
    message: str
    severity: Severity


KNOWN_SECTIONS = ("document", "render", "engine", "parser", "sections", "styles", "server")

_CSS_LENGTH_RE = re.compile(r"^\d+(\.\d+)?(px|in|cm|mm)$")

_ALLOWED_KEYS = {
    "document": ("title", "description"),
    "render": tuple(f.name for f in fields(RenderOptions)),
    "engine": tuple(f.name for f in fields(EngineOptions)),
    "parser": ("escape_raw_html",),
    "server": (
        "host",
        "port",
        "upload_dir",
        "max_upload_bytes",
        "cleanup_interval_seconds",
        "max_file_age_seconds",
        "escape_raw_html",
        "cors_origins",
    ),
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(raw_config: Dict[str, Any]) -> List[ConfigError]:
    """Validate raw configuration and return a list of issues.

    Args:
        raw_config: Raw config dict from YAML

    Returns:
        List of ConfigError (empty = valid)
    """
    errors: List[ConfigError] = []

    if not isinstance(raw_config, dict):
        return [ConfigError(field="<root>", message="configuration must be a mapping", severity=Severity.ERROR)]

    for key in raw_config:
        if key not in KNOWN_SECTIONS:
            errors.append(ConfigError(
                field=key,
                message=f"unknown configuration section {key!r} is ignored",
                severity=Severity.WARNING,
            ))

    validators = {
        "document": _validate_document,
        "render": _validate_render,
        "engine": _validate_engine,
        "parser": _validate_parser,
        "sections": _validate_sections,
        "styles": _validate_styles,
        "server": _validate_server,
    }
    for key in KNOWN_SECTIONS:
        section = raw_config.get(key) or {}
        if not isinstance(section, dict):
            errors.append(ConfigError(
                field=key,
                message=f"{key} must be a mapping, got {type(section).__name__}",
                severity=Severity.ERROR,
            ))
            continue
        for option in section:
            if key in _ALLOWED_KEYS and option not in _ALLOWED_KEYS[key]:
                errors.append(ConfigError(
                    field=f"{key}.{option}",
                    message=f"unknown option {option!r}",
                    severity=Severity.ERROR,
                ))
        if key in validators:
            errors.extend(validators[key](section))
    return errors


def _validate_document(document: Dict[str, Any]) -> List[ConfigError]:
    errors: List[ConfigError] = []
    for key in ("title", "description"):
        if key in document and (not isinstance(document[key], str) or not document[key].strip()):
            errors.append(ConfigError(
                field=f"document.{key}",
                message=f"{key} must be non-empty text, got {document[key]!r}",
                severity=Severity.ERROR,
            ))
    return errors


def _validate_render(render: Dict[str, Any]) -> List[ConfigError]:
    errors: List[ConfigError] = []

    # --- Page format ---
    page_format = render.get("format", "A4")
    if page_format not in PAPER_FORMATS:
        errors.append(ConfigError(
            field="render.format",
            message=f"format must be one of {', '.join(PAPER_FORMATS)}, got {page_format!r}",
            severity=Severity.ERROR,
        ))

    # --- Margins ---
    margin = render.get("margin", {})
    if not isinstance(margin, dict):
        errors.append(ConfigError(
            field="render.margin",
            message="margin must be a mapping of top/bottom/left/right lengths",
            severity=Severity.ERROR,
        ))
    else:
        for side, value in margin.items():
            if side not in ("top", "bottom", "left", "right"):
                errors.append(ConfigError(
                    field=f"render.margin.{side}",
                    message=f"unknown margin side {side!r}",
                    severity=Severity.ERROR,
                ))
            elif not isinstance(value, str) or not _CSS_LENGTH_RE.match(value):
                errors.append(ConfigError(
                    field=f"render.margin.{side}",
                    message=f"margin must be a length in px, in, cm or mm, got {value!r}",
                    severity=Severity.ERROR,
                ))

    # --- Wait condition ---
    wait_until = render.get("wait_until", "networkidle")
    if wait_until not in WAIT_CONDITIONS:
        errors.append(ConfigError(
            field="render.wait_until",
            message=f"wait_until must be one of {', '.join(WAIT_CONDITIONS)}, got {wait_until!r}",
            severity=Severity.ERROR,
        ))

    # --- Timeout ---
    timeout_ms = render.get("timeout_ms", 30000)
    if not _is_int(timeout_ms) or timeout_ms < 0:
        errors.append(ConfigError(
            field="render.timeout_ms",
            message=f"timeout_ms must be a non-negative integer, got {timeout_ms!r}",
            severity=Severity.ERROR,
        ))
    elif timeout_ms == 0:
        errors.append(ConfigError(
            field="render.timeout_ms",
            message="timeout_ms of 0 disables the render timeout",
            severity=Severity.WARNING,
        ))

    for flag in ("print_background", "prefer_css_page_size"):
        if flag in render and not isinstance(render[flag], bool):
            errors.append(ConfigError(
                field=f"render.{flag}",
                message=f"{flag} must be true or false, got {render[flag]!r}",
                severity=Severity.ERROR,
            ))

    return errors


def _validate_engine(engine: Dict[str, Any]) -> List[ConfigError]:
    errors: List[ConfigError] = []
    for flag in ("headless", "sandbox"):
        if flag in engine and not isinstance(engine[flag], bool):
            errors.append(ConfigError(
                field=f"engine.{flag}",
                message=f"{flag} must be true or false, got {engine[flag]!r}",
                severity=Severity.ERROR,
            ))
    args = engine.get("args", [])
    if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
        errors.append(ConfigError(
            field="engine.args",
            message="args must be a list of command-line flags",
            severity=Severity.ERROR,
        ))
    return errors


def _validate_parser(parser: Dict[str, Any]) -> List[ConfigError]:
    errors: List[ConfigError] = []
    if "escape_raw_html" in parser and not isinstance(parser["escape_raw_html"], bool):
        errors.append(ConfigError(
            field="parser.escape_raw_html",
            message=f"escape_raw_html must be true or false, got {parser['escape_raw_html']!r}",
            severity=Severity.ERROR,
        ))
    return errors


def _validate_sections(sections: Dict[str, Any]) -> List[ConfigError]:
    errors: List[ConfigError] = []
    for heading, role in sections.items():
        if not isinstance(heading, str) or not heading.strip():
            errors.append(ConfigError(
                field=f"sections.{heading}",
                message="section headings must be non-empty text",
                severity=Severity.ERROR,
            ))
        elif role not in KNOWN_ROLES:
            errors.append(ConfigError(
                field=f"sections.{heading}",
                message=f"role must be one of {', '.join(KNOWN_ROLES)}, got {role!r}",
                severity=Severity.ERROR,
            ))
    return errors


def _validate_styles(styles: Dict[str, Any]) -> List[ConfigError]:
    errors: List[ConfigError] = []
    groups = {f.name: f.default_factory for f in fields(StyleTokens)}  # type: ignore[misc]
    for group, overrides in styles.items():
        if group not in groups:
            errors.append(ConfigError(
                field=f"styles.{group}",
                message=f"unknown style group {group!r}",
                severity=Severity.ERROR,
            ))
            continue
        if not isinstance(overrides, dict):
            errors.append(ConfigError(
                field=f"styles.{group}",
                message="style group overrides must be a mapping",
                severity=Severity.ERROR,
            ))
            continue
        known = {f.name for f in fields(groups[group]())}
        for key, value in overrides.items():
            if key not in known:
                errors.append(ConfigError(
                    field=f"styles.{group}.{key}",
                    message=f"unknown style token {key!r}",
                    severity=Severity.ERROR,
                ))
            elif not isinstance(value, str):
                errors.append(ConfigError(
                    field=f"styles.{group}.{key}",
                    message=f"style tokens must be strings, got {value!r}",
                    severity=Severity.ERROR,
                ))
    return errors


def _validate_server(server: Dict[str, Any]) -> List[ConfigError]:
    errors: List[ConfigError] = []

    port = server.get("port", 8081)
    if not _is_int(port) or not 0 < port < 65536:
        errors.append(ConfigError(
            field="server.port",
            message=f"port must be an integer between 1 and 65535, got {port!r}",
            severity=Severity.ERROR,
        ))

    for key in ("max_upload_bytes", "cleanup_interval_seconds", "max_file_age_seconds"):
        value = server.get(key, 1)
        if not _is_int(value) or value <= 0:
            errors.append(ConfigError(
                field=f"server.{key}",
                message=f"{key} must be a positive integer, got {value!r}",
                severity=Severity.ERROR,
            ))

    for key in ("host", "upload_dir"):
        if key in server and (not isinstance(server[key], str) or not server[key].strip()):
            errors.append(ConfigError(
                field=f"server.{key}",
                message=f"{key} must be non-empty text, got {server[key]!r}",
                severity=Severity.ERROR,
            ))

    if "escape_raw_html" in server and not isinstance(server["escape_raw_html"], bool):
        errors.append(ConfigError(
            field="server.escape_raw_html",
            message=f"escape_raw_html must be true or false, got {server['escape_raw_html']!r}",
            severity=Severity.ERROR,
        ))

    origins = server.get("cors_origins", [])
    if not isinstance(origins, list) or not all(isinstance(o, str) and o for o in origins):
        errors.append(ConfigError(
            field="server.cors_origins",
            message="cors_origins must be a list of origin URLs",
            severity=Severity.ERROR,
        ))

    return errors


def has_errors(issues: List[ConfigError]) -> bool:
    """Return True if any issue has ERROR severity."""
    return any(i.severity == Severity.ERROR for i in issues)
