"""HTML document values and the document assembler."""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Union

DEFAULT_TITLE = "Professional CV"
DEFAULT_DESCRIPTION = "Professional CV generated from markdown"
GENERATOR_NAME = "Markdown to ATS CV Generator"


@dataclass(frozen=True)
class HtmlFragment:
    """Body-only HTML produced by the parser."""

    html: str

    def __str__(self) -> str:
        return self.html


@dataclass(frozen=True)
class RenderDocument:
    """A complete, standalone HTML document ready for the rendering engine."""

    html: str
    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION

    def __str__(self) -> str:
        return self.html


def _head(title: str, description: str, stylesheet: str) -> str:
    return (
        '    <meta charset="UTF-8">\n'
        '    <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f'    <meta name="description" content="{html.escape(description, quote=True)}">\n'
        f'    <meta name="generator" content="{GENERATOR_NAME}">\n'
        f"    <title>{html.escape(title, quote=False)}</title>\n"
        "    <style>\n"
        f"{stylesheet}\n"
        "    </style>"
    )


def assemble(
    fragment: Union[HtmlFragment, str],
    stylesheet: str,
    title: str | None = None,
    description: str | None = None,
) -> RenderDocument:
    """Wrap *fragment* and *stylesheet* into a standalone HTML document.

    The stylesheet is embedded inline so the rendering engine never has to
    resolve external assets. The fragment is copied into ``<body>`` verbatim.
    """
    body = fragment.html if isinstance(fragment, HtmlFragment) else fragment
    title = title or DEFAULT_TITLE
    description = description or DEFAULT_DESCRIPTION

    document = (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        f"{_head(title, description, stylesheet)}\n"
        "</head>\n"
        "<body>\n"
        f"{body}\n"
        "</body>\n"
        "</html>"
    )
    return RenderDocument(html=document, title=title, description=description)
