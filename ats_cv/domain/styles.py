"""Design tokens and the CSS stylesheet synthesized from them.

The stylesheet is built from an ordered list of layers; later layers may
override earlier ones, so the order in :data:`STYLE_LAYERS` matters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Tuple

from .sections import ROLE_HIGHLIGHT, ROLE_SUMMARY, role_class


@dataclass(frozen=True)
class Colors:
    primary: str = "#2c3e50"
    secondary: str = "#3498db"
    text_main: str = "#333"
    text_muted: str = "#555"
    text_light: str = "#7f8c8d"
    border: str = "#bdc3c7"
    border_light: str = "#ecf0f1"
    background: str = "white"
    accent_background: str = "#f8f9fa"


@dataclass(frozen=True)
class FontSizes:
    main_title: str = "24pt"
    section_header: str = "14pt"
    subsection_header: str = "12pt"
    body_text: str = "11pt"
    contact_info: str = "10pt"
    print_body: str = "10pt"
    print_title: str = "20pt"
    print_section: str = "12pt"
    print_subsection: str = "11pt"


@dataclass(frozen=True)
class Spacing:
    section_margin_top: str = "20pt"
    section_margin_bottom: str = "8pt"
    subsection_margin_top: str = "12pt"
    subsection_margin_bottom: str = "3pt"
    paragraph_margin: str = "8pt"
    list_margin: str = "10pt"
    list_item_margin: str = "3pt"
    list_padding: str = "15pt"
    border_width: str = "2pt"
    thin_border: str = "1pt"
    accent_border: str = "3pt"


@dataclass(frozen=True)
class Fonts:
    primary: str = "'Arial', 'Helvetica', sans-serif"
    fallback: str = "Arial, Helvetica, sans-serif"


@dataclass(frozen=True)
class Layout:
    max_width: str = "210mm"
    page_margin: str = "15mm"
    print_margin: str = "10mm"
    line_height: str = "1.4"


@dataclass(frozen=True)
class StyleTokens:
    """Read-only design constants the stylesheet is built from."""

    colors: Colors = field(default_factory=Colors)
    font_sizes: FontSizes = field(default_factory=FontSizes)
    spacing: Spacing = field(default_factory=Spacing)
    fonts: Fonts = field(default_factory=Fonts)
    layout: Layout = field(default_factory=Layout)


DEFAULT_TOKENS = StyleTokens()


def base_styles(t: StyleTokens) -> str:
    return f"""
* {{
    margin: 0;
    padding: 0;
    box-sizing: border-box;
}}

body {{
    font-family: {t.fonts.primary};
    font-size: {t.font_sizes.body_text};
    line-height: {t.layout.line_height};
    color: {t.colors.text_main};
    background: {t.colors.background};
    max-width: {t.layout.max_width};
    margin: 0 auto;
    padding: {t.layout.page_margin};
}}
"""


def typography_styles(t: StyleTokens) -> str:
    return f"""
h1 {{
    font-size: {t.font_sizes.main_title};
    font-weight: bold;
    color: {t.colors.primary};
    margin-bottom: 5pt;
    text-align: center;
    border-bottom: {t.spacing.border_width} solid {t.colors.secondary};
    padding-bottom: 8pt;
}}

h2 {{
    font-size: {t.font_sizes.section_header};
    font-weight: bold;
    color: {t.colors.primary};
    margin-top: {t.spacing.section_margin_top};
    margin-bottom: {t.spacing.section_margin_bottom};
    padding-bottom: 3pt;
    border-bottom: {t.spacing.thin_border} solid {t.colors.border};
    text-transform: uppercase;
    letter-spacing: 0.5pt;
}}

h3 {{
    font-size: {t.font_sizes.subsection_header};
    font-weight: bold;
    color: {t.colors.primary};
    margin-top: {t.spacing.subsection_margin_top};
    margin-bottom: {t.spacing.subsection_margin_bottom};
}}

p {{
    margin-bottom: {t.spacing.paragraph_margin};
    text-align: justify;
}}

strong, b {{
    font-weight: bold;
    color: {t.colors.primary};
}}

em, i {{
    font-style: italic;
    color: {t.colors.text_light};
}}
"""


def section_styles(t: StyleTokens) -> str:
    return f"""
body > p:first-of-type {{
    text-align: center;
    margin-bottom: 15pt;
    color: {t.colors.text_muted};
    font-size: {t.font_sizes.contact_info};
}}

h3 + p strong,
h3 + p b {{
    color: {t.colors.text_light};
    font-weight: normal;
    font-style: italic;
}}

hr {{
    border: none;
    border-top: {t.spacing.thin_border} solid {t.colors.border_light};
    margin: 15pt 0;
}}
"""


def list_styles(t: StyleTokens) -> str:
    return f"""
ul {{
    margin-bottom: {t.spacing.list_margin};
    padding-left: {t.spacing.list_padding};
}}

li {{
    margin-bottom: {t.spacing.list_item_margin};
    list-style-type: disc;
}}
"""


def special_section_styles(t: StyleTokens) -> str:
    summary = role_class(ROLE_SUMMARY)
    highlight = role_class(ROLE_HIGHLIGHT)
    return f"""
h2.{summary} + p {{
    font-style: italic;
    background-color: {t.colors.accent_background};
    padding: 10pt;
    border-left: {t.spacing.accent_border} solid {t.colors.secondary};
    margin-bottom: 15pt;
}}

h2.{highlight} + h3 {{
    color: {t.colors.secondary};
}}
"""


def print_styles(t: StyleTokens) -> str:
    return f"""
@media print {{
    body {{
        padding: {t.layout.print_margin};
        font-size: {t.font_sizes.print_body};
    }}

    h1 {{
        font-size: {t.font_sizes.print_title};
    }}

    h2 {{
        font-size: {t.font_sizes.print_section};
        page-break-after: avoid;
    }}

    h3 {{
        font-size: {t.font_sizes.print_subsection};
        page-break-after: avoid;
    }}

    p, li {{
        page-break-inside: avoid;
    }}

    .page-break {{
        page-break-before: always;
    }}
}}
"""


def utility_styles(t: StyleTokens) -> str:
    return f"""
.contact-info {{
    font-size: {t.font_sizes.contact_info};
    text-align: center;
    margin-bottom: 15pt;
}}

.section {{
    margin-bottom: 20pt;
}}

.job-title {{
    font-weight: bold;
    color: {t.colors.primary};
}}

.company-info {{
    color: {t.colors.text_light};
    font-style: italic;
    margin-bottom: 5pt;
}}

.achievement {{
    margin-left: 10pt;
}}
"""


StyleLayer = Callable[[StyleTokens], str]

STYLE_LAYERS: Tuple[StyleLayer, ...] = (
    base_styles,
    typography_styles,
    section_styles,
    list_styles,
    special_section_styles,
    print_styles,
    utility_styles,
)


def synthesize(tokens: StyleTokens = DEFAULT_TOKENS) -> str:
    """Build the complete stylesheet for *tokens*.

    Pure and deterministic: equal tokens always give byte-identical CSS.
    """
    return "".join(layer(tokens) for layer in STYLE_LAYERS).strip() + "\n"
