"""Amenity and qualifier detection."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# surface keyword -> canonical amenity tag, checked in this order
AMENITY_KEYWORDS: Mapping[str, str] = MappingProxyType(
    {
        "pool": "pool",
        "swimming pool": "pool",
        "parking": "parking",
        "garage": "parking",
        "car park": "parking",
        "furnished": "furnished",
        "serviced": "serviced",
        "gated": "gated",
        "estate": "estate",
    }
)

AMENITY_TAGS: frozenset[str] = frozenset(AMENITY_KEYWORDS.values())

PRICE_ASC_WORDS = ("cheap", "affordable")
PRICE_DESC_WORDS = ("luxury", "expensive")


def extract_amenities(text: str | None) -> list[str]:
    """Return one canonical tag per keyword found in ``text``.

    Keywords are plain substring checks, so a tag repeats when several of its
    synonyms occur ("swimming pool" yields ``["pool", "pool"]``).
    """
    if not text:
        return []
    lower = text.lower()
    return [tag for keyword, tag in AMENITY_KEYWORDS.items() if keyword in lower]


def extract_qualifiers(text: str | None) -> dict[str, str]:
    out: dict[str, str] = {}
    if not text:
        return out
    lower = text.lower()
    if any(word in lower for word in PRICE_ASC_WORDS):
        out["sort"] = "price_asc"
    # NOTE: evaluated second, so "cheap luxury" sorts by price_desc.
    if any(word in lower for word in PRICE_DESC_WORDS):
        out["sort"] = "price_desc"
    return out
