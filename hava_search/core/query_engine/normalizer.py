"""Query normalization: lowercasing plus local slang/abbreviation expansion."""

from __future__ import annotations

import re
from types import MappingProxyType

ABBREVIATIONS = MappingProxyType(
    {
        "ph": "port harcourt",
        "abj": "abuja",
        "lag": "lagos",
        "selfcon": "self contain",
        "self-con": "self contain",
        "apt": "apartment",
        "tolet": "rent",
        "lekki ph1": "lekki phase 1",
        "vi": "victoria island",
    }
)


def _whole_word(phrase: str) -> re.Pattern[str]:
    # \b fails next to non-word chars such as "-", so use lookarounds instead.
    return re.compile(rf"(?<!\w){re.escape(phrase)}(?!\w)", flags=re.IGNORECASE)


_ABBREVIATION_PATTERNS = tuple(
    (_whole_word(abbr), full) for abbr, full in ABBREVIATIONS.items()
)


def normalize_query(text: str | None) -> str:
    """Lowercase ``text`` and expand known abbreviations, whole words only.

    ``None`` and the empty string both normalize to ``""``.
    """
    if not text:
        return ""

    out = text.lower()
    for pattern, full in _ABBREVIATION_PATTERNS:
        out = pattern.sub(full, out)
    return out
