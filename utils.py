"""
utils.py

Markup and string helpers shared by the name decomposer and the record builder.
"""

from __future__ import annotations

import re
from typing import Iterable, List

import lxml.html
from lxml import etree

# Placeholders the data source uses for an unknown surname / given name
NAME_PLACEHOLDERS = ("@N.N.", "@P.N.")

# Errors lxml raises for input it cannot turn into a tree
MARKUP_ERRORS = (etree.ParserError, etree.XMLSyntaxError, ValueError)

_WHITESPACE_RE = re.compile(r"\s+")


def parse_html_fragment(markup: str) -> etree._Element:
    """
    Parse an HTML fragment into a tree rooted at a synthetic ``<div>``.

    Leading text and sibling elements are kept in document order below the
    wrapper, so absolute XPath expressions (``//...``) see the whole fragment.

    Args:
        markup: The HTML fragment, e.g. ``'John <span class="SURN">Smith</span>'``

    Returns:
        The wrapper element

    Raises:
        lxml.etree.ParserError, lxml.etree.XMLSyntaxError or ValueError if
        lxml cannot build a tree from the input
    """
    return lxml.html.fragment_fromstring(markup or "", create_parent="div")


def strip_tags(markup: str) -> str:
    """Return the plain text of an HTML fragment, or "" for empty input."""
    if not markup or not markup.strip():
        return ""
    if "<" not in markup and "&" not in markup:
        return markup.strip()
    try:
        return parse_html_fragment(markup).text_content().strip()
    except MARKUP_ERRORS:
        return re.sub(r"<[^>]*>", "", markup).strip()


def split_tokens(parts: Iterable[str]) -> List[str]:
    """
    Concatenate text parts and re-split them on whitespace.

    Empty and whitespace-only tokens are dropped; order is preserved.
    """
    return " ".join(p.strip() for p in parts).split()


def collapse_whitespace(s: str) -> str:
    """Collapse runs of whitespace to single spaces and strip the ends."""
    return _WHITESPACE_RE.sub(" ", s or "").strip()


def remove_name_placeholders(name: str) -> str:
    """Remove the unknown-name placeholders and tidy the remaining spacing."""
    for placeholder in NAME_PLACEHOLDERS:
        name = (name or "").replace(placeholder, "")
    return collapse_whitespace(name)


def asset_url(base_url: str, path: str) -> str:
    """Join a module asset path onto the configured asset base URL."""
    if not base_url:
        return path
    return base_url.rstrip("/") + "/" + path.lstrip("/")
