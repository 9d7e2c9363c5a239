"""Application configuration loaded from YAML.

All settings are optional; an empty file (or no file at all) yields the
defaults. Components receive the relevant frozen section explicitly rather
than reading globals.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .config_validator import Severity, has_errors, validate_config
from .domain.document import DEFAULT_DESCRIPTION, DEFAULT_TITLE
from .domain.markdown_parser import ParserOptions
from .domain.sections import DEFAULT_SECTION_ROLES, build_section_roles
from .domain.styles import StyleTokens
from .errors import ConfigurationError
from .rendering.options import EngineOptions, PageMargin, RenderOptions

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/config.yaml"
CONFIG_ENV_VAR = "ATS_CV_CONFIG"


@dataclass(frozen=True)
class DocumentOptions:
    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION


@dataclass(frozen=True)
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8081
    upload_dir: str = "public/uploads"
    max_upload_bytes: int = 5 * 1024 * 1024
    cleanup_interval_seconds: int = 60 * 60
    max_file_age_seconds: int = 24 * 60 * 60
    # Uploaded markdown is untrusted; embedded HTML is escaped by default.
    escape_raw_html: bool = True
    # Browser origins allowed to call the API.
    cors_origins: Tuple[str, ...] = ("http://localhost:8081",)


@dataclass(frozen=True)
class AppConfig:
    document: DocumentOptions = field(default_factory=DocumentOptions)
    render: RenderOptions = field(default_factory=RenderOptions)
    engine: EngineOptions = field(default_factory=EngineOptions)
    parser: ParserOptions = field(default_factory=ParserOptions)
    tokens: StyleTokens = field(default_factory=StyleTokens)
    server: ServerConfig = field(default_factory=ServerConfig)


def _build_tokens(styles: Dict[str, Dict[str, str]]) -> StyleTokens:
    tokens = StyleTokens()
    for group, overrides in styles.items():
        tokens = replace(tokens, **{group: replace(getattr(tokens, group), **overrides)})
    return tokens


def _apply_env_overrides(server: Dict[str, Any]) -> Dict[str, Any]:
    server = dict(server)
    if os.environ.get("PORT"):
        try:
            server["port"] = int(os.environ["PORT"])
        except ValueError:
            server["port"] = os.environ["PORT"]
    if os.environ.get("ATS_CV_UPLOAD_DIR"):
        server["upload_dir"] = os.environ["ATS_CV_UPLOAD_DIR"]
    return server


def config_from_dict(data: Optional[Dict[str, Any]]) -> AppConfig:
    """Validate raw config data and build an :class:`AppConfig`.

    Raises:
        ConfigurationError: validation reported at least one error.
    """
    if data is not None and not isinstance(data, dict):
        raise ConfigurationError("Invalid configuration", {"errors": ["<root>: configuration must be a mapping"]})
    raw = dict(data or {})
    raw["server"] = _apply_env_overrides(raw.get("server") or {})

    issues = validate_config(raw)
    for issue in issues:
        if issue.severity == Severity.WARNING:
            logger.warning("Config warning (%s): %s", issue.field, issue.message)
    if has_errors(issues):
        problems = [f"{i.field}: {i.message}" for i in issues if i.severity == Severity.ERROR]
        raise ConfigurationError("Invalid configuration", {"errors": problems})

    document = raw.get("document") or {}
    render = dict(raw.get("render") or {})
    engine = dict(raw.get("engine") or {})
    parser = raw.get("parser") or {}
    sections = raw.get("sections")

    margin = PageMargin(**(render.pop("margin", None) or {}))
    if "args" in engine:
        engine["args"] = tuple(engine["args"])
    server = dict(raw["server"])
    if "cors_origins" in server:
        server["cors_origins"] = tuple(server["cors_origins"])

    roles = build_section_roles(sections) if sections is not None else dict(DEFAULT_SECTION_ROLES)

    return AppConfig(
        document=DocumentOptions(**document),
        render=RenderOptions(margin=margin, **render),
        engine=EngineOptions(**engine),
        parser=ParserOptions(escape_raw_html=parser.get("escape_raw_html", False), section_roles=roles),
        tokens=_build_tokens(raw.get("styles") or {}),
        server=ServerConfig(**server),
    )


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load configuration from YAML.

    Resolution order: *config_path*, then ``$ATS_CV_CONFIG``, then
    ``config/config.yaml``. A missing default file yields the defaults; a
    missing explicitly requested file raises ``FileNotFoundError``.
    """
    explicit = config_path or os.environ.get(CONFIG_ENV_VAR)
    path = Path(explicit or DEFAULT_CONFIG_PATH)

    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {path}")
        return config_from_dict({})

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Config file is not valid YAML: {path}", {"reason": str(e)}) from e

    return config_from_dict(data)
