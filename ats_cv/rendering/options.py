"""Page geometry and browser launch options for the PDF renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

#: Page formats accepted by Chromium's print-to-PDF.
PAPER_FORMATS = ("Letter", "Legal", "Tabloid", "Ledger", "A0", "A1", "A2", "A3", "A4", "A5", "A6")

#: Load states ``page.set_content`` can wait for.
WAIT_CONDITIONS = ("load", "domcontentloaded", "networkidle", "commit")

# Flags that only matter when the sandbox is off.
SANDBOX_DISABLING_ARGS = ("--no-sandbox", "--disable-setuid-sandbox")

DEFAULT_BROWSER_ARGS = (
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--disable-gpu",
)


@dataclass(frozen=True)
class PageMargin:
    top: str = "10mm"
    bottom: str = "10mm"
    left: str = "10mm"
    right: str = "10mm"

    def to_dict(self) -> Dict[str, str]:
        return {"top": self.top, "bottom": self.bottom, "left": self.left, "right": self.right}


@dataclass(frozen=True)
class RenderOptions:
    """Print settings plus the content-load wait condition and its timeout."""

    format: str = "A4"
    margin: PageMargin = field(default_factory=PageMargin)
    print_background: bool = True
    prefer_css_page_size: bool = True
    wait_until: str = "networkidle"
    timeout_ms: int = 30000

    def pdf_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for Playwright's ``page.pdf``."""
        return {
            "format": self.format,
            "margin": self.margin.to_dict(),
            "print_background": self.print_background,
            "prefer_css_page_size": self.prefer_css_page_size,
        }


@dataclass(frozen=True)
class EngineOptions:
    """How the headless Chromium instance is launched.

    The sandbox is off by default so the renderer works inside containers
    and other restricted hosts. Turn it on when rendering untrusted input.
    """

    headless: bool = True
    sandbox: bool = False
    args: Tuple[str, ...] = DEFAULT_BROWSER_ARGS
    executable_path: str | None = None

    def launch_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for Playwright's ``chromium.launch``."""
        args = list(self.args)
        if not self.sandbox:
            args = list(SANDBOX_DISABLING_ARGS) + [a for a in args if a not in SANDBOX_DISABLING_ARGS]
        kwargs: Dict[str, Any] = {
            "headless": self.headless,
            "chromium_sandbox": self.sandbox,
            "args": args,
        }
        if self.executable_path:
            kwargs["executable_path"] = self.executable_path
        return kwargs
