"""
names/decomposer.py

Extract first names, last names, preferred name, nickname and alternate
names from the formatted (HTML) name of an individual.

The formatted name marks the name parts with inline elements, e.g.::

    <span class="NAME" dir="auto" translate="no">John
        <span class="starredname">Paul</span>
        <q class="wt-nickname">Jack</q>
        <span class="SURN">Smith</span></span>

The parts are located with XPath queries over the parsed fragment rather
than with string heuristics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from lxml import etree

from names.direction import is_rtl
from utils import MARKUP_ERRORS, parse_html_fragment, remove_name_placeholders, split_tokens, strip_tags

log = logging.getLogger(__name__)


def _has_class(name: str) -> str:
    """XPath predicate matching elements carrying ``name`` as one of their class tokens."""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


_SURNAME = f"span[{_has_class('SURN')}]"
_NICKNAME = f"*[{_has_class('wt-nickname')}]"


class NameMarkupError(ValueError):
    """Raised when a name fragment cannot be parsed as markup at all."""


@dataclass(frozen=True)
class NameParts:
    """Name parts of one individual."""
    first_names: Tuple[str, ...] = ()
    last_names: Tuple[str, ...] = ()
    preferred_name: str = ""
    nickname: str = ""
    alternative_names: Tuple[str, ...] = ()
    is_alternative_rtl: bool = False
    display_name: str = ""


class NameDecomposer:
    """
    Splits a formatted full name into its parts.

    The queries run in a fixed order: preferred name, last names, first
    names, alternate names. Text claimed as last name (everything inside a
    surname span, plus everything after the last one) is never reported as
    first name, and nickname text is never part of either.

    The decomposer holds no state; one instance may serve any number of
    records in any order.
    """

    _preferred_name = etree.XPath(f"string((//span[{_has_class('starredname')}])[1])")
    _last_names = etree.XPath(
        f"//text()[not(ancestor::{_NICKNAME})]"
        f"[ancestor::{_SURNAME} or not(following::{_SURNAME})]"
        f"[normalize-space()]"
    )
    _first_names = etree.XPath(
        f"//text()[following::{_SURNAME}]"
        f"[not(ancestor::{_SURNAME})]"
        f"[not(ancestor::{_NICKNAME})]"
        f"[normalize-space()]"
    )
    _nickname = etree.XPath(f"string((//{_NICKNAME})[1])")
    _alternative_name = etree.XPath("//span[contains(@class, 'NAME')]")

    def decompose(
        self,
        full_name_markup: Optional[str],
        full_name_flat: Optional[str] = "",
        alternate_name_markup: Optional[str] = None,
    ) -> NameParts:
        """
        Decompose a formatted full name.

        Never raises: missing or malformed markup yields empty parts.

        Args:
            full_name_markup: The formatted full name (HTML)
            full_name_flat: The same name as plain text, possibly containing
                the unknown-name placeholders; derived from the markup if empty
            alternate_name_markup: The formatted alternate (e.g. foreign script)
                name, or None

        Returns:
            The extracted NameParts
        """
        display_name = remove_name_placeholders(full_name_flat or strip_tags(full_name_markup or ""))

        preferred_name = ""
        last_names: List[str] = []
        first_names: List[str] = []
        nickname = ""

        tree = self._parse_full_name(full_name_markup)
        if tree is not None:
            # Do not change processing order
            preferred_name = self.preferred_name(tree)
            last_names = self.last_names(tree)
            first_names = self.first_names(tree)
            nickname = self.nickname(tree)

        try:
            alternative_names = self.alternate_names(alternate_name_markup)
        except NameMarkupError as exc:
            log.warning("Ignoring unparsable alternate name %r: %s", alternate_name_markup, exc)
            alternative_names = []

        return NameParts(
            first_names=tuple(first_names),
            last_names=tuple(last_names),
            preferred_name=preferred_name,
            nickname=nickname,
            alternative_names=tuple(alternative_names),
            is_alternative_rtl=is_rtl(alternative_names),
            display_name=display_name,
        )

    def _parse_full_name(self, markup: Optional[str]) -> Optional[etree._Element]:
        if not markup or not markup.strip():
            return None
        try:
            return parse_html_fragment(markup)
        except MARKUP_ERRORS as exc:
            log.warning("Cannot parse name markup %r: %s", markup, exc)
            return None

    def preferred_name(self, tree: etree._Element) -> str:
        """Returns the preferred (starred) name, or "" if none is marked."""
        return str(self._preferred_name(tree)).strip()

    def last_names(self, tree: etree._Element) -> List[str]:
        """Returns all last names in document order."""
        # Concat to the full last name first, as the surname may consist of
        # a prefix, the surname span and a separate suffix
        return split_tokens(self._last_names(tree))

    def first_names(self, tree: etree._Element) -> List[str]:
        """Returns all first names in document order."""
        return split_tokens(self._first_names(tree))

    def nickname(self, tree: etree._Element) -> str:
        """Returns the nickname, or "" if none is marked."""
        return str(self._nickname(tree)).strip()

    def alternate_names(self, markup: Optional[str]) -> List[str]:
        """
        Returns the tokens of the alternate name.

        Uses the text of the first element whose class contains ``NAME``, or
        the text of the whole fragment if there is none.

        Raises:
            NameMarkupError: If the fragment cannot be parsed
        """
        if markup is None or not markup.strip():
            return []
        try:
            root = parse_html_fragment(markup)
        except MARKUP_ERRORS as exc:
            raise NameMarkupError(f"Cannot parse alternate name markup: {exc}") from exc

        nodes = self._alternative_name(root)
        name = nodes[0].text_content() if nodes else root.text_content()
        return name.split()
