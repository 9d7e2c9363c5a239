"""Lookup table mapping conventional résumé headings to style roles.

CSS cannot select elements by their text, so the parser tags matching
``<h2>`` headings with a role class and the stylesheet styles the class.
Matching is case-insensitive on the whole heading text after collapsing
internal whitespace; partial matches do not count.
"""

from __future__ import annotations

import re
from typing import Dict, Mapping, Optional

#: Role given to the paragraph that follows a summary heading.
ROLE_SUMMARY = "summary"
#: Role whose first sub-heading gets the accent colour.
ROLE_HIGHLIGHT = "highlight"

KNOWN_ROLES = (ROLE_SUMMARY, ROLE_HIGHLIGHT)

SectionRoles = Mapping[str, str]

DEFAULT_SECTION_ROLES: Dict[str, str] = {
    "professional summary": ROLE_SUMMARY,
    "summary": ROLE_SUMMARY,
    "education": ROLE_HIGHLIGHT,
    "certifications": ROLE_HIGHLIGHT,
    "projects": ROLE_HIGHLIGHT,
}

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_heading(text: str) -> str:
    """Lower-case *text* and collapse whitespace runs for lookup."""
    return _WHITESPACE_RE.sub(" ", text).strip().lower()


def build_section_roles(raw: Mapping[str, str]) -> Dict[str, str]:
    """Build a lookup table from user config, normalizing the heading keys."""
    return {normalize_heading(heading): role for heading, role in raw.items()}


def section_role(heading: str, roles: Optional[SectionRoles] = None) -> Optional[str]:
    """Return the role for *heading*, or ``None`` when it is not special."""
    table = DEFAULT_SECTION_ROLES if roles is None else roles
    return table.get(normalize_heading(heading))


def role_class(role: str) -> str:
    return f"section-{role}"
