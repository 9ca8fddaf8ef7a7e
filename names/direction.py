"""
names/direction.py

Script direction detection for name strings.
"""

from __future__ import annotations

import unicodedata
from typing import Iterable, Union

# Bidi classes of strong characters
_STRONG_RTL = ("R", "AL")
_STRONG_LTR = "L"


def is_rtl(text: Union[str, Iterable[str]]) -> bool:
    """
    Check whether a text is written in a right-to-left script.

    The decision is made by the first character with a strong bidi class:
    Hebrew, Arabic, Syriac, Thaana, etc. are right-to-left, Latin, Cyrillic,
    Greek, CJK, etc. are left-to-right. Digits, punctuation and spaces are
    skipped. A text without any strong character is not right-to-left.

    Args:
        text: A string or a sequence of name tokens

    Returns:
        True if the first strong character is right-to-left
    """
    if not isinstance(text, str):
        text = " ".join(text)
    for ch in text:
        bidi = unicodedata.bidirectional(ch)
        if bidi in _STRONG_RTL:
            return True
        if bidi == _STRONG_LTR:
            return False
    return False
