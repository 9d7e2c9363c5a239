"""ATS-oriented markup normalization.

Some applicant tracking systems only recognise plain ``<b>``/``<i>`` markup
and choke on formatting whitespace. The rewrites below are a best-effort
heuristic: they improve the odds of clean text extraction but guarantee
nothing about any particular ATS.

Whitespace inside ``<pre>`` blocks is collapsed too.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Pattern, Tuple, TypeVar, Union

from .document import HtmlFragment, RenderDocument

RewriteRule = Tuple[Pattern[str], str]

#: Ordered (pattern, replacement) pairs applied by :func:`normalize_html`.
ATS_REWRITE_RULES: Tuple[RewriteRule, ...] = (
    (re.compile(r"<strong>"), "<b>"),
    (re.compile(r"</strong>"), "</b>"),
    (re.compile(r"<em>"), "<i>"),
    (re.compile(r"</em>"), "</i>"),
    (re.compile(r"\s+"), " "),
)

Normalizable = TypeVar("Normalizable", RenderDocument, HtmlFragment, str)


def normalize_html(html: str, rules: Tuple[RewriteRule, ...] = ATS_REWRITE_RULES) -> str:
    """Apply *rules* in order, then trim surrounding whitespace."""
    for pattern, replacement in rules:
        html = pattern.sub(replacement, html)
    return html.strip()


def normalize(doc: Normalizable) -> Normalizable:
    """Normalize a fragment or a full document, returning the same type."""
    if isinstance(doc, (RenderDocument, HtmlFragment)):
        return replace(doc, html=normalize_html(doc.html))
    if isinstance(doc, str):
        return normalize_html(doc)
    raise TypeError(f"Cannot normalize {type(doc).__name__}")


def is_normalized(doc: Union[RenderDocument, HtmlFragment, str]) -> bool:
    html = doc if isinstance(doc, str) else doc.html
    return normalize_html(html) == html
