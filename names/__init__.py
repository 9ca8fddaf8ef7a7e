"""
names package

Structured name parts extracted from formatted name markup.
"""

from names.decomposer import NameDecomposer, NameMarkupError, NameParts
from names.direction import is_rtl

__all__ = [
    "NameDecomposer",
    "NameMarkupError",
    "NameParts",
    "is_rtl",
]
