"""Markdown -> HTML fragment conversion.

Pure functions over strings; reading files is the caller's job
(see :mod:`ats_cv.files`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List
from xml.etree.ElementTree import Element

import markdown as md_lib
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from ..errors import ContentProcessingError
from .document import HtmlFragment
from .sections import DEFAULT_SECTION_ROLES, SectionRoles, role_class, section_role

logger = logging.getLogger(__name__)

#: Python-Markdown extensions making up the supported grammar.
MARKDOWN_EXTENSIONS = ["tables", "fenced_code", "sane_lists"]


@dataclass(frozen=True)
class ParserOptions:
    """Options for :func:`parse`.

    ``escape_raw_html`` turns embedded HTML into visible, escaped text instead
    of passing it to the rendering engine. Enable it for untrusted input.
    """

    escape_raw_html: bool = False
    section_roles: SectionRoles = field(default_factory=lambda: dict(DEFAULT_SECTION_ROLES))


class SectionRoleTreeprocessor(Treeprocessor):
    """Add ``section-<role>`` classes to ``<h2>`` headings found in the role table."""

    def __init__(self, md: md_lib.Markdown, roles: SectionRoles):
        super().__init__(md)
        self.roles = roles

    def run(self, root: Element) -> None:
        for heading in root.iter("h2"):
            role = section_role("".join(heading.itertext()), self.roles)
            if role is None:
                continue
            classes = (heading.get("class") or "").split()
            css_class = role_class(role)
            if css_class not in classes:
                classes.append(css_class)
            heading.set("class", " ".join(classes))


class SectionRoleExtension(Extension):
    def __init__(self, roles: SectionRoles, **kwargs: Any):
        self.roles = roles
        super().__init__(**kwargs)

    def extendMarkdown(self, md: md_lib.Markdown) -> None:
        # Runs after the inline processor (priority 20) so emphasis inside
        # a heading is already split into child elements.
        md.treeprocessors.register(SectionRoleTreeprocessor(md, self.roles), "section_roles", 5)


class EscapeRawHtmlExtension(Extension):
    """Disable raw HTML passthrough so tags are emitted as escaped text."""

    def extendMarkdown(self, md: md_lib.Markdown) -> None:
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")


def _build_extensions(options: ParserOptions) -> List[Any]:
    extensions: List[Any] = list(MARKDOWN_EXTENSIONS)
    extensions.append(SectionRoleExtension(options.section_roles))
    if options.escape_raw_html:
        extensions.append(EscapeRawHtmlExtension())
    return extensions


def parse(source_text: str, options: ParserOptions | None = None) -> HtmlFragment:
    """Convert markdown *source_text* to an HTML body fragment.

    A fresh ``Markdown`` instance is built per call, so concurrent calls
    never share parser state.

    Raises:
        ContentProcessingError: the input is not text or could not be tokenized.
    """
    if not isinstance(source_text, str):
        raise ContentProcessingError(
            "Failed to process markdown content",
            {"reason": f"expected text, got {type(source_text).__name__}"},
        )

    options = options or ParserOptions()
    try:
        converter = md_lib.Markdown(extensions=_build_extensions(options), output_format="html")
        html = converter.convert(source_text)
    except RecursionError as e:
        raise ContentProcessingError(
            "Failed to process markdown content", {"reason": "document is nested too deeply"}
        ) from e
    except Exception as e:
        logger.debug("Markdown conversion failed: %s", e)
        raise ContentProcessingError("Failed to process markdown content", {"reason": str(e)}) from e

    return HtmlFragment(html)

