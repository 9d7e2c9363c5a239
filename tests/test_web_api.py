"""Tests for the CV generation HTTP API."""

from __future__ import annotations

import re
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from ats_cv.config import AppConfig, ServerConfig
from ats_cv.errors import EngineLaunchError, RenderTimeoutError
from ats_cv.rendering.pdf_renderer import validate_output_path
from ats_cv.web.app import build_generator, create_app

PDF_BYTES = b"%PDF-1.7\n%fake\n"
CV = b"# Jane Doe\n\n## Summary\n\nShips **reliable** services.\n"


class FakeRenderer:
    """Records documents and writes a placeholder PDF."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.docs = []

    async def render(self, doc, output_path, options=None, observer=None):
        path = validate_output_path(output_path)
        if self.error:
            raise self.error
        self.docs.append(doc)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(PDF_BYTES)
        return path


def _make_client(tmp_path: Path, renderer: FakeRenderer | None = None, **server_overrides) -> TestClient:
    server = ServerConfig(upload_dir=str(tmp_path / "uploads"), **server_overrides)
    config = AppConfig(server=server)
    generator = build_generator(config)
    generator.renderer = renderer or FakeRenderer()
    return TestClient(create_app(config, generator=generator))


def _upload(content: bytes = CV, filename: str = "cv.md", content_type: str = "text/markdown"):
    return {"markdown": (filename, content, content_type)}


def test_root_redirects_to_api_docs(tmp_path: Path) -> None:
    with _make_client(tmp_path) as client:
        response = client.get("/", follow_redirects=False)
    assert response.status_code in (302, 307)
    assert response.headers["location"] == "/api"


def test_api_docs_lists_endpoints(tmp_path: Path) -> None:
    with _make_client(tmp_path) as client:
        response = client.get("/api")
    assert response.status_code == 200
    payload = response.json()
    assert payload["name"] == "Markdown to ATS CV Generator API"
    assert "POST /api/generate" in payload["endpoints"]


def test_health(tmp_path: Path) -> None:
    with _make_client(tmp_path) as client:
        response = client.get("/api/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "healthy"
    assert payload["uptime"] >= 0
    assert payload["timestamp"].endswith("Z")


def test_cors_allows_configured_origin(tmp_path: Path) -> None:
    with _make_client(tmp_path) as client:
        preflight = client.options(
            "/api/generate",
            headers={"Origin": "http://localhost:8081", "Access-Control-Request-Method": "POST"},
        )
        response = client.get("/api/health", headers={"Origin": "http://localhost:8081"})
    assert preflight.status_code == 200
    assert preflight.headers["access-control-allow-origin"] == "http://localhost:8081"
    assert response.headers["access-control-allow-origin"] == "http://localhost:8081"
    assert response.headers["access-control-allow-credentials"] == "true"


def test_cors_ignores_other_origins(tmp_path: Path) -> None:
    with _make_client(tmp_path, cors_origins=("https://cv.example.com",)) as client:
        allowed = client.get("/api/health", headers={"Origin": "https://cv.example.com"})
        denied = client.get("/api/health", headers={"Origin": "http://localhost:8081"})
    assert allowed.headers["access-control-allow-origin"] == "https://cv.example.com"
    assert "access-control-allow-origin" not in denied.headers


def test_template_download(tmp_path: Path) -> None:
    with _make_client(tmp_path) as client:
        response = client.get("/api/template")
    assert response.status_code == 200
    assert "cv-template.md" in response.headers["content-disposition"]
    assert response.text.startswith("# ")


def test_generate_and_download_pdf(tmp_path: Path) -> None:
    renderer = FakeRenderer()
    with _make_client(tmp_path, renderer) as client:
        response = client.post("/api/generate", files=_upload(), data={"title": "Jane Doe - CV"})
        assert response.status_code == 200
        payload = response.json()

        assert payload["success"] is True
        assert re.fullmatch(r"cv-\d+-[0-9a-f]{6}\.pdf", payload["filename"])
        assert payload["download_url"] == f"/api/download/{payload['filename']}"
        assert payload["generated_at"].endswith("Z")
        assert (tmp_path / "uploads" / payload["filename"]).exists()

        download = client.get(payload["download_url"])

    assert download.status_code == 200
    assert download.headers["content-type"] == "application/pdf"
    assert download.content == PDF_BYTES
    doc = renderer.docs[0]
    assert doc.title == "Jane Doe - CV"
    assert "<b>reliable</b>" in doc.html


def test_generate_without_ats_optimization(tmp_path: Path) -> None:
    renderer = FakeRenderer()
    with _make_client(tmp_path, renderer) as client:
        response = client.post("/api/generate", files=_upload(), data={"optimize_ats": "false"})
    assert response.status_code == 200
    assert "<strong>reliable</strong>" in renderer.docs[0].html


def test_generate_escapes_raw_html_by_default(tmp_path: Path) -> None:
    renderer = FakeRenderer()
    with _make_client(tmp_path, renderer) as client:
        client.post("/api/generate", files=_upload(b"# Jane\n\n<script>alert(1)</script>\n"))
    assert "<script>" not in renderer.docs[0].html


def test_concurrent_generations_get_distinct_files(tmp_path: Path) -> None:
    with _make_client(tmp_path) as client:
        names = {client.post("/api/generate", files=_upload()).json()["filename"] for _ in range(3)}
    assert len(names) == 3


def test_generate_rejects_non_markdown(tmp_path: Path) -> None:
    with _make_client(tmp_path) as client:
        response = client.post("/api/generate", files=_upload(filename="cv.txt", content_type="text/plain"))
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_FILE_TYPE"


def test_markdown_content_type_is_accepted_without_md_suffix(tmp_path: Path) -> None:
    with _make_client(tmp_path) as client:
        response = client.post("/api/preview", files=_upload(filename="cv", content_type="text/markdown"))
    assert response.status_code == 200


def test_generate_rejects_oversized_upload(tmp_path: Path) -> None:
    with _make_client(tmp_path, max_upload_bytes=16) as client:
        response = client.post("/api/generate", files=_upload(b"# " + b"x" * 64))
    assert response.status_code == 422
    payload = response.json()
    assert payload["error"]["code"] == "UPLOAD_TOO_LARGE"
    assert payload["error"]["details"]["max_upload_bytes"] == 16


def test_generate_requires_file(tmp_path: Path) -> None:
    with _make_client(tmp_path) as client:
        response = client.post("/api/generate", data={"title": "x"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


def test_generate_rejects_invalid_utf8(tmp_path: Path) -> None:
    with _make_client(tmp_path) as client:
        response = client.post("/api/generate", files=_upload(b"\xff\xfe bad"))
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INPUT_ERROR"


@pytest.mark.parametrize(
    ("error", "status_code", "code"),
    [
        (RenderTimeoutError("Content did not load"), 504, "RENDER_TIMEOUT"),
        (EngineLaunchError("Failed to launch browser for PDF generation"), 503, "ENGINE_LAUNCH_ERROR"),
    ],
)
def test_render_failures_map_to_status_codes(tmp_path: Path, error, status_code, code) -> None:
    with _make_client(tmp_path, FakeRenderer(error=error)) as client:
        response = client.post("/api/generate", files=_upload())
    assert response.status_code == status_code
    assert response.json()["error"]["code"] == code
    assert list((tmp_path / "uploads").iterdir()) == []


def test_preview_returns_fragment(tmp_path: Path) -> None:
    with _make_client(tmp_path) as client:
        response = client.post("/api/preview", files=_upload(CV + b"\n<img src=x onerror=alert(1)>\n"))
    assert response.status_code == 200
    html = response.json()["html"]
    assert '<h2 class="section-summary">Summary</h2>' in html
    assert "<img" not in html
    assert "<html" not in html


def test_download_rejects_unknown_and_non_pdf_files(tmp_path: Path) -> None:
    with _make_client(tmp_path) as client:
        (tmp_path / "uploads" / "notes.txt").write_text("secret", encoding="utf-8")
        missing = client.get("/api/download/cv-missing.pdf")
        not_pdf = client.get("/api/download/notes.txt")
        traversal = client.get("/api/download/..%2Fsecret.pdf")

    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "NOT_FOUND"
    assert not_pdf.status_code == 404
    assert traversal.status_code == 404


def test_lifespan_creates_upload_directory(tmp_path: Path) -> None:
    with _make_client(tmp_path):
        assert (tmp_path / "uploads").is_dir()
