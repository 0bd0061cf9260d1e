"""
DOM Utilities

Static approximations of browser notions (visibility, inner text,
interactivity, document order) over a BeautifulSoup tree.
"""

import re
from typing import Dict, List

from bs4 import BeautifulSoup, NavigableString, Tag

from .text_utils import normalize_text

_NON_RENDERED_TAGS = {'script', 'style', 'template', 'noscript', 'head'}

_HIDDEN_STYLE = re.compile(r'display\s*:\s*none|visibility\s*:\s*hidden', re.IGNORECASE)

HEADING_SELECTOR = "h1, h2, h3, h4, h5, h6, [role='heading']"

INTERACTIVE_SELECTOR = ", ".join([
    "button",
    "a[href]",
    "summary",
    "[role='button']",
    "[onclick]",
    "[tabindex]",
    "input[type='button']",
    "input[type='submit']",
])


def _hides_itself(tag: Tag) -> bool:
    """Check the element's own attributes for hiding markers."""
    if tag.name in _NON_RENDERED_TAGS:
        return True
    if tag.has_attr('hidden'):
        return True
    if str(tag.get('aria-hidden', '')).lower() == 'true':
        return True
    if tag.name == 'input' and str(tag.get('type', '')).lower() == 'hidden':
        return True
    style = tag.get('style')
    return bool(style and _HIDDEN_STYLE.search(style))


def is_visible(tag: Tag) -> bool:
    """Return True unless the element or one of its ancestors is hidden."""
    node = tag
    while isinstance(node, Tag) and not isinstance(node, BeautifulSoup):
        if _hides_itself(node):
            return False
        node = node.parent
    return True


def visible_text(tag: Tag) -> str:
    """
    Text a user would see inside the element, whitespace-normalized.

    Skips non-rendered tags and hidden subtrees. Input controls contribute
    their value, like a button label.
    """
    if not is_visible(tag):
        return ""

    parts: List[str] = []
    _collect_text(tag, parts)
    return normalize_text(" ".join(parts))


def visible_lines(tag: Tag) -> List[str]:
    """Visible text split into non-empty lines, one per text node."""
    if not is_visible(tag):
        return []

    parts: List[str] = []
    _collect_text(tag, parts)
    lines = [normalize_text(part) for part in parts]
    return [line for line in lines if line]


def _collect_text(tag: Tag, parts: List[str]) -> None:
    if tag.name == 'input':
        value = tag.get('value')
        if value:
            parts.append(str(value))
        return

    for child in tag.children:
        if isinstance(child, NavigableString):
            if type(child) is NavigableString:
                parts.append(str(child))
        elif isinstance(child, Tag) and not _hides_itself(child):
            _collect_text(child, parts)


def document_order(soup: BeautifulSoup) -> Dict[int, int]:
    """
    Map element identity to its depth-first position in the document.

    Keys are id() of each Tag; only valid while the tree is not mutated.
    """
    return {id(tag): index for index, tag in enumerate(soup.find_all(True))}


def has_ancestor_in(tag: Tag, candidates: List[Tag]) -> bool:
    """Check whether any of candidates is a proper ancestor of tag."""
    wanted = {id(c) for c in candidates}
    return any(id(parent) in wanted for parent in tag.parents)
