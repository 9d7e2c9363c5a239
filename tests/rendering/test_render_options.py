"""Tests for render and browser launch options."""

from ats_cv.rendering.options import (
    DEFAULT_BROWSER_ARGS,
    EngineOptions,
    PageMargin,
    RenderOptions,
)


def test_pdf_kwargs_defaults():
    assert RenderOptions().pdf_kwargs() == {
        "format": "A4",
        "margin": {"top": "10mm", "bottom": "10mm", "left": "10mm", "right": "10mm"},
        "print_background": True,
        "prefer_css_page_size": True,
    }


def test_pdf_kwargs_custom_margin():
    options = RenderOptions(format="Letter", margin=PageMargin(top="1in"))
    kwargs = options.pdf_kwargs()

    assert kwargs["format"] == "Letter"
    assert kwargs["margin"]["top"] == "1in"
    assert kwargs["margin"]["left"] == "10mm"


def test_launch_kwargs_without_sandbox_adds_no_sandbox_flags():
    kwargs = EngineOptions().launch_kwargs()

    assert kwargs["headless"] is True
    assert kwargs["chromium_sandbox"] is False
    assert kwargs["args"][:2] == ["--no-sandbox", "--disable-setuid-sandbox"]
    assert all(arg in kwargs["args"] for arg in DEFAULT_BROWSER_ARGS)
    assert "executable_path" not in kwargs


def test_launch_kwargs_with_sandbox_omits_no_sandbox_flags():
    kwargs = EngineOptions(sandbox=True, args=("--disable-gpu",)).launch_kwargs()

    assert kwargs["chromium_sandbox"] is True
    assert kwargs["args"] == ["--disable-gpu"]


def test_launch_kwargs_executable_path():
    kwargs = EngineOptions(executable_path="/usr/bin/chromium").launch_kwargs()
    assert kwargs["executable_path"] == "/usr/bin/chromium"


def test_no_sandbox_flags_are_not_duplicated():
    kwargs = EngineOptions(args=("--no-sandbox",)).launch_kwargs()
    assert kwargs["args"].count("--no-sandbox") == 1
