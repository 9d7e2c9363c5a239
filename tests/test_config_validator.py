"""Tests for configuration validator."""

from ats_cv.config_validator import (
    ConfigError,
    Severity,
    has_errors,
    validate_config,
)


def _fields(issues, severity=Severity.ERROR):
    return [i.field for i in issues if i.severity == severity]


class TestValidateConfig:
    """Tests for validate_config()."""

    def _valid_config(self) -> dict:
        """Return a fully specified valid config."""
        return {
            "document": {"title": "Jane Doe - CV"},
            "render": {
                "format": "Letter",
                "margin": {"top": "0.5in", "bottom": "12.5mm"},
                "wait_until": "load",
                "timeout_ms": 10000,
            },
            "engine": {"headless": True, "sandbox": True, "args": ["--disable-gpu"]},
            "parser": {"escape_raw_html": True},
            "sections": {"Work History": "highlight"},
            "styles": {"colors": {"primary": "#000"}},
            "server": {"port": 9000, "max_upload_bytes": 1024},
        }

    def test_empty_config_is_valid(self):
        assert validate_config({}) == []

    def test_valid_config_no_errors(self):
        assert not has_errors(validate_config(self._valid_config()))

    def test_non_mapping_root(self):
        issues = validate_config(["render"])
        assert has_errors(issues)
        assert issues[0].field == "<root>"

    def test_unknown_section_is_warning(self):
        issues = validate_config({"llm": {}})
        assert not has_errors(issues)
        assert _fields(issues, Severity.WARNING) == ["llm"]

    def test_section_must_be_mapping(self):
        assert _fields(validate_config({"render": "A4"})) == ["render"]

    def test_unknown_option(self):
        assert "render.dpi" in _fields(validate_config({"render": {"dpi": 300}}))

    def test_invalid_format(self):
        assert _fields(validate_config({"render": {"format": "B7"}})) == ["render.format"]

    def test_invalid_margin_units(self):
        issues = validate_config({"render": {"margin": {"top": "10", "middle": "1mm", "left": "5pt"}}})
        assert sorted(_fields(issues)) == ["render.margin.left", "render.margin.middle", "render.margin.top"]

    def test_invalid_wait_condition(self):
        assert _fields(validate_config({"render": {"wait_until": "idle"}})) == ["render.wait_until"]

    def test_negative_timeout_is_error(self):
        assert _fields(validate_config({"render": {"timeout_ms": -1}})) == ["render.timeout_ms"]

    def test_zero_timeout_is_warning(self):
        issues = validate_config({"render": {"timeout_ms": 0}})
        assert not has_errors(issues)
        assert _fields(issues, Severity.WARNING) == ["render.timeout_ms"]

    def test_boolean_timeout_is_rejected(self):
        assert has_errors(validate_config({"render": {"timeout_ms": True}}))

    def test_engine_flags_and_args(self):
        issues = validate_config({"engine": {"headless": "yes", "args": "--no-sandbox"}})
        assert sorted(_fields(issues)) == ["engine.args", "engine.headless"]

    def test_unknown_section_role(self):
        assert _fields(validate_config({"sections": {"Education": "bold"}})) == ["sections.Education"]

    def test_styles_validation(self):
        issues = validate_config(
            {"styles": {"colours": {}, "colors": {"primary": 1, "nope": "#fff"}, "fonts": "Arial"}}
        )
        assert sorted(_fields(issues)) == [
            "styles.colors.nope",
            "styles.colors.primary",
            "styles.colours",
            "styles.fonts",
        ]

    def test_server_port_range(self):
        assert _fields(validate_config({"server": {"port": 70000}})) == ["server.port"]
        assert _fields(validate_config({"server": {"port": "8081"}})) == ["server.port"]

    def test_server_limits_must_be_positive(self):
        issues = validate_config({"server": {"max_upload_bytes": 0, "max_file_age_seconds": -5}})
        assert sorted(_fields(issues)) == ["server.max_file_age_seconds", "server.max_upload_bytes"]

    def test_document_text_must_be_string(self):
        assert _fields(validate_config({"document": {"title": 2024}})) == ["document.title"]
        assert _fields(validate_config({"document": {"description": "  "}})) == ["document.description"]
        assert _fields(validate_config({"document": {"title": "Jane Doe - CV"}})) == []

    def test_escape_raw_html_must_be_boolean(self):
        assert _fields(validate_config({"parser": {"escape_raw_html": "false"}})) == ["parser.escape_raw_html"]
        assert _fields(validate_config({"server": {"escape_raw_html": "yes"}})) == ["server.escape_raw_html"]
        assert _fields(validate_config({"parser": {"escape_raw_html": False}})) == []

    def test_server_text_options(self):
        issues = validate_config({"server": {"host": "", "upload_dir": 5}})
        assert sorted(_fields(issues)) == ["server.host", "server.upload_dir"]

    def test_cors_origins_must_be_list_of_urls(self):
        assert _fields(validate_config({"server": {"cors_origins": "http://localhost:8081"}})) == ["server.cors_origins"]
        assert _fields(validate_config({"server": {"cors_origins": ["", 3]}})) == ["server.cors_origins"]
        assert _fields(validate_config({"server": {"cors_origins": ["https://cv.example.com"]}})) == []


class TestHasErrors:
    def test_warnings_only(self):
        assert not has_errors([ConfigError("x", "m", Severity.WARNING)])

    def test_with_error(self):
        assert has_errors([ConfigError("x", "m", Severity.WARNING), ConfigError("y", "m", Severity.ERROR)])

    def test_empty(self):
        assert not has_errors([])
