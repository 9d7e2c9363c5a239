"""Global pytest fixtures for deterministic test environment."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear local runtime env that can leak into tests on developer machines."""
    for key in (
        "ATS_CV_CONFIG",
        "ATS_CV_UPLOAD_DIR",
        "PORT",
    ):
        monkeypatch.delenv(key, raising=False)
