"""Price parsing and price-range extraction for free-text listing searches.

Supported magnitudes: ``500k``, ``20m``, ``1.5b`` and comma separated
amounts such as ``1,200,000``. Amounts may carry a naira marker
(``₦``, ``ngn``, ``naira`` or a bare ``n`` prefix).

Range detection is an ordered list of ``(pattern, handler)`` rules; the
first rule that matches and yields a value wins.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from types import MappingProxyType
from typing import Callable, Mapping

MULTIPLIERS: Mapping[str, int] = MappingProxyType(
    {"k": 1_000, "m": 1_000_000, "b": 1_000_000_000}
)

PERIOD_SYNONYMS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "yearly": ("yearly", "annually", "a year", "per annum", "year"),
        "monthly": ("monthly", "a month", "month"),
        "weekly": ("weekly", "a week", "week"),
        "nightly": ("daily", "a day", "a night", "night", "day"),
    }
)

MONTHLY_FACTORS: Mapping[str, float] = MappingProxyType(
    {"yearly": 1 / 12.0, "monthly": 1.0, "weekly": 4.333, "nightly": 30.417}
)

_NUMBER = r"(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?"
_CURRENCY = r"(?:(?:₦|ngn|naira)\s*|n(?=\d))?"
_AMOUNT = rf"{_CURRENCY}({_NUMBER}[kmb]?)(?!\w)"

_PARSE_RE = re.compile(r"(\d+(?:\.\d+)?)\s*([kmb])?")

_PERIOD_PATTERNS = tuple(
    (period, re.compile(r"\b(?:" + "|".join(synonyms) + r")\b"))
    for period, synonyms in PERIOD_SYNONYMS.items()
)

PriceRange = dict[str, int]
_Handler = Callable[[re.Match[str]], "PriceRange | None"]


def parse_price(text: str | None) -> int | None:
    """Parse one amount with an optional k/m/b suffix into an integer.

    Returns ``None`` when ``text`` holds no digits.
    """
    if not text:
        return None

    cleaned = text.strip().lower().replace(",", "")
    cleaned = re.sub(r"₦|ngn|naira", "", cleaned).strip()
    if cleaned.startswith("n"):
        cleaned = cleaned[1:]

    match = _PARSE_RE.search(cleaned)
    if not match:
        return None

    value = Decimal(match.group(1))
    suffix = match.group(2)
    if suffix:
        value *= MULTIPLIERS[suffix]
    try:
        return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # more digits than the decimal context can represent
        return None


def _bounded(match: re.Match[str]) -> PriceRange | None:
    low, high = parse_price(match.group(1)), parse_price(match.group(2))
    if low is None or high is None:
        return None
    return {"min": low, "max": high}


def _single(key: str) -> _Handler:
    def handler(match: re.Match[str]) -> PriceRange | None:
        value = parse_price(match.group(1))
        return None if value is None else {key: value}

    return handler


PRICE_RULES: tuple[tuple[re.Pattern[str], _Handler], ...] = (
    (re.compile(rf"\bbetween\s+{_AMOUNT}\s+(?:and|to)\s+{_AMOUNT}"), _bounded),
    (re.compile(rf"\b(?:at\s*least|minimum)\s*{_AMOUNT}"), _single("min")),
    (re.compile(rf"\b(?:at\s*most|maximum)\s*{_AMOUNT}"), _single("max")),
    (
        re.compile(rf"\b(?:less\s+than|under|below|cheaper\s+than)\s*{_AMOUNT}"),
        _single("max"),
    ),
    (
        re.compile(rf"\b(?:above|over|greater\s+than|more\s+than|expensive\s+than)\s*{_AMOUNT}"),
        _single("min"),
    ),
    (re.compile(rf"(?<![\w.,]){_AMOUNT}"), _single("value")),
)


def extract_price_range(text: str | None) -> PriceRange | None:
    """Return ``{min, max}``, ``{max}``, ``{min}`` or ``{value}``; ``None`` if no price."""
    if not text:
        return None
    lower = text.lower()

    for pattern, handler in PRICE_RULES:
        match = pattern.search(lower)
        if not match:
            continue
        result = handler(match)
        if result is not None:
            return result
    return None


def extract_price_period(text: str | None) -> str | None:
    """Return the canonical billing period (``yearly``, ``monthly``, ...) named in ``text``."""
    if not text:
        return None
    lower = text.lower()
    for period, pattern in _PERIOD_PATTERNS:
        if pattern.search(lower):
            return period
    return None


def period_to_monthly(amount: float | None, period: str | None) -> float | None:
    if amount is None or period is None:
        return amount
    return amount * MONTHLY_FACTORS.get(period, 1.0)
