"""Room counts and land size from free text, plus explicit numeric filter parsing."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

NUMBER_WORDS: Mapping[str, int] = MappingProxyType(
    {
        "one": 1,
        "two": 2,
        "three": 3,
        "four": 4,
        "five": 5,
        "six": 6,
        "seven": 7,
        "eight": 8,
        "nine": 9,
        "ten": 10,
    }
)

QUANTITY = r"(\d+|" + "|".join(NUMBER_WORDS) + r")"

# output field -> unit words that may follow the quantity
ROOM_TERMS: Mapping[str, str] = MappingProxyType(
    {
        "bedrooms": r"bedroom|bed",
        "bathrooms": r"bath|toilet|wc",
        "living_rooms": r"living\s*room|sitting\s*room|parlou?r|lounge",
        "kitchens": r"kitchen",
    }
)

_ROOM_PATTERNS = tuple(
    (field, re.compile(rf"\b{QUANTITY}\s*(?:{terms})", flags=re.IGNORECASE))
    for field, terms in ROOM_TERMS.items()
)
_LAND_RE = re.compile(r"(\d+)\s*(sqm|acre|hectare)", flags=re.IGNORECASE)
_LAND_SQM_RE = re.compile(
    r"(\d+(?:\.\d+)?)\s*(sqm|square\s*met(?:er|re)s?|m2|acres?|hectares?|ha)\b",
    flags=re.IGNORECASE,
)

SQM_PER_ACRE = 4046.8564224
SQM_PER_HECTARE = 10_000.0

OPERATORS = ("=", ">", "<", ">=", "<=")

# comparison phrase -> operator, shared by explicit filters and free text
OPERATOR_PHRASES: Mapping[str, str] = MappingProxyType(
    {
        r"at\s*least|minimum": ">=",
        r"at\s*most|maximum": "<=",
        r"more\s+than|over|above|greater\s+than": ">",
        r"less\s+than|fewer\s+than|under|below": "<",
    }
)
_OPERATOR_PHRASES = tuple(
    (re.compile(rf"^(?:{phrase})\s+"), f"{symbol} ")
    for phrase, symbol in OPERATOR_PHRASES.items()
)
_ANY_OPERATOR = "|".join(OPERATOR_PHRASES)

# "at least 3 bedrooms": optional comparison phrase, count, room word
_ROOM_CONSTRAINT_PATTERNS = tuple(
    (
        field,
        re.compile(
            rf"(?:\b({_ANY_OPERATOR})\s+)?\b{QUANTITY}\s*(?:{terms})\w*", flags=re.IGNORECASE
        ),
    )
    for field, terms in ROOM_TERMS.items()
)
_CONSTRAINT_RE = re.compile(r"^(>=|<=|>|<|=)?\s*(\w+)$")


@dataclass(frozen=True)
class NumericConstraint:
    operator: str
    value: int

    def to_dict(self) -> dict[str, Any]:
        return {"operator": self.operator, "value": self.value}


def _to_int(token: str) -> int | None:
    lower = token.lower()
    if lower in NUMBER_WORDS:
        return NUMBER_WORDS[lower]
    try:
        return int(lower)
    except ValueError:
        # digit runs past the interpreter's int conversion limit
        return None


def _phrase_operator(phrase: str | None) -> str:
    if not phrase:
        return "="
    for pattern, symbol in OPERATOR_PHRASES.items():
        if re.fullmatch(pattern, phrase.lower()):
            return symbol
    return "="


def extract_numbers(text: str | None) -> dict[str, Any]:
    """Extract room counts and land size from ``text``.

    Each field is matched independently and left out when absent:

    >>> extract_numbers("4 bedroom 2 bath flat with 600 sqm land")
    {'bedrooms': 4, 'bathrooms': 2, 'land_size': '600 sqm'}
    """
    result: dict[str, Any] = {}
    if not text:
        return result

    for field, pattern in _ROOM_PATTERNS:
        match = pattern.search(text)
        if match:
            value = _to_int(match.group(1))
            if value is not None:
                result[field] = value

    land = _LAND_RE.search(text)
    if land:
        result["land_size"] = f"{land.group(1)} {land.group(2).lower()}"

    return result


def extract_room_constraints(text: str | None) -> dict[str, NumericConstraint]:
    """Room counts with the comparison phrase in front of them.

    ``"at least 3 bedrooms"`` gives ``{"bedrooms": NumericConstraint(">=", 3)}``;
    a bare count compares with ``=``.
    """
    result: dict[str, NumericConstraint] = {}
    if not text:
        return result

    for field, pattern in _ROOM_CONSTRAINT_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        value = _to_int(match.group(2))
        if value is not None:
            result[field] = NumericConstraint(_phrase_operator(match.group(1)), value)
    return result


def strip_room_counts(text: str | None) -> str:
    """Drop room-count phrases so their numbers are not read as prices."""
    if not text:
        return ""
    for _, pattern in _ROOM_CONSTRAINT_PATTERNS:
        text = pattern.sub(" ", text)
    return re.sub(r"\s{2,}", " ", text).strip()


def parse_number_input(raw: Any) -> NumericConstraint | None:
    """Parse an explicit filter value such as ``"3"``, ``"two"``, ``">= 2"`` or ``"at least 2"``."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return NumericConstraint("=", raw)

    text = str(raw).strip().lower()
    if not text:
        return None
    for pattern, symbol in _OPERATOR_PHRASES:
        if pattern.match(text):
            text = pattern.sub(symbol, text, count=1)
            break

    match = _CONSTRAINT_RE.match(text)
    if not match:
        return None
    token = match.group(2)
    if token not in NUMBER_WORDS and not token.isdecimal():
        return None
    value = _to_int(token)
    if value is None:
        return None
    return NumericConstraint(match.group(1) or "=", value)


def land_size_to_sqm(text: str | None) -> float | None:
    """Convert a land size such as ``"600 sqm"`` or ``"2 acres"`` to square metres."""
    if not text:
        return None
    match = _LAND_SQM_RE.search(str(text))
    if not match:
        return None

    value = float(match.group(1))
    unit = match.group(2).lower()
    if not math.isfinite(value):
        return None
    if unit.startswith("acre"):
        return value * SQM_PER_ACRE
    if unit.startswith("hectare") or unit == "ha":
        return value * SQM_PER_HECTARE
    return value
