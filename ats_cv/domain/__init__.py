"""Pure document transformations: markdown -> HTML -> ATS-normalized HTML.

Nothing in this package performs I/O.
"""

from .ats import ATS_REWRITE_RULES, normalize, normalize_html
from .document import DEFAULT_TITLE, HtmlFragment, RenderDocument, assemble
from .markdown_parser import ParserOptions, parse
from .sections import DEFAULT_SECTION_ROLES, section_role
from .styles import DEFAULT_TOKENS, STYLE_LAYERS, StyleTokens, synthesize

__all__ = [
    "ATS_REWRITE_RULES",
    "DEFAULT_SECTION_ROLES",
    "DEFAULT_TITLE",
    "DEFAULT_TOKENS",
    "HtmlFragment",
    "ParserOptions",
    "RenderDocument",
    "STYLE_LAYERS",
    "StyleTokens",
    "assemble",
    "normalize",
    "normalize_html",
    "parse",
    "section_role",
    "synthesize",
]
