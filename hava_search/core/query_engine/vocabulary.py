"""Fixed search vocabulary: noise words, property types, locations, purchase intent."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

NOISE_WORDS: tuple[str, ...] = (
    "nice",
    "beautiful",
    "lovely",
    "modern",
    "good",
    "newly",
    "built",
    "awesome",
    "affordable",
    "cheap",
    "luxury",
    "expensive",
)

_NOISE_RE = re.compile(r"\b(?:" + "|".join(NOISE_WORDS) + r")\b", flags=re.IGNORECASE)

# synonym -> canonical listing property_type; first entry that matches wins
PROPERTY_SYNONYMS: Mapping[str, str] = MappingProxyType(
    {
        "self contain": "Self-Contain",
        "self-contain": "Self-Contain",
        "mini flat": "Apartment",
        "apartment": "Apartment",
        "flat": "Apartment",
        "penthouse": "Apartment",
        "duplex": "Duplex",
        "semi-detached": "Duplex",
        "terrace": "Terrace",
        "terraced": "Terrace",
        "bungalow": "Bungalow",
        "mansion": "Detached House",
        "detached": "Detached House",
        "house": "House",
        "land": "Land",
        "plot": "Land",
        "shop": "Commercial",
        "office": "Commercial",
        "warehouse": "Commercial",
    }
)

# Canonical types too generic to act as a strict filter.
NOISE_PROPERTY_TYPES: frozenset[str] = frozenset({"House"})

CITY_TO_STATE: Mapping[str, str] = MappingProxyType(
    {
        "lekki": "Lagos",
        "ikeja": "Lagos",
        "ikoyi": "Lagos",
        "victoria island": "Lagos",
        "yaba": "Lagos",
        "ajah": "Lagos",
        "surulere": "Lagos",
        "port harcourt": "Rivers",
        "wuse": "FCT",
        "maitama": "FCT",
        "gwarinpa": "FCT",
        "asokoro": "FCT",
        "ibadan": "Oyo",
        "enugu": "Enugu",
        "benin city": "Edo",
        "kano": "Kano",
        "kaduna": "Kaduna",
        "uyo": "Akwa Ibom",
        "calabar": "Cross River",
        "abeokuta": "Ogun",
        "owerri": "Imo",
        "warri": "Delta",
    }
)

STATES: tuple[str, ...] = (
    "Lagos",
    "Abuja",
    "FCT",
    "Rivers",
    "Oyo",
    "Ogun",
    "Enugu",
    "Edo",
    "Delta",
    "Kano",
    "Kaduna",
    "Anambra",
    "Imo",
    "Akwa Ibom",
    "Cross River",
    "Plateau",
    "Kwara",
)

# canonical state -> other names listings use for it
STATE_ALIASES: Mapping[str, tuple[str, ...]] = MappingProxyType({"FCT": ("Abuja",)})
_CANONICAL_STATE = {alias: state for state, aliases in STATE_ALIASES.items() for alias in aliases}

_PURCHASE_RE = re.compile(r"\b(?:for\s+)?((?:to\s+)?let|lease|rent(?:al)?|sale|buy)\b", re.IGNORECASE)


def strip_noise_words(text: str | None) -> str:
    """Remove subjective filler words and collapse the remaining whitespace."""
    if not text:
        return ""
    return re.sub(r"\s{2,}", " ", _NOISE_RE.sub(" ", text)).strip()


def detect_property_type(
    text: str | None, synonyms: Mapping[str, str] | None = None
) -> str | None:
    """Return the canonical property type for the first synonym found in ``text``.

    Multi-word and hyphenated synonyms are matched as substrings, single words
    only as whole words so that "flat" does not fire on "flatmate".
    """
    if not text:
        return None
    table = PROPERTY_SYNONYMS if synonyms is None else synonyms
    lower = text.lower()

    for synonym, canonical in table.items():
        syn = synonym.lower()
        if re.search(r"[\s-]", syn):
            if syn in lower:
                return canonical
        elif re.search(rf"\b{re.escape(syn)}\b", lower):
            return canonical
    return None


def detect_location(text: str | None) -> tuple[str | None, str | None]:
    """Return ``(city, state)`` mentioned in ``text``; a city implies its state.

    States are reported by canonical name, so "abuja" gives ``"FCT"``.
    """
    if not text:
        return None, None
    lower = text.lower()

    for city, state in CITY_TO_STATE.items():
        if city in lower:
            return city, state
    for state in STATES:
        if re.search(rf"\b{re.escape(state.lower())}\b", lower):
            return None, _CANONICAL_STATE.get(state, state)
    return None, None


def state_names(state: str) -> tuple[str, ...]:
    """The canonical state name followed by its aliases."""
    return (state, *STATE_ALIASES.get(state, ()))


def detect_purchase_category(text: str | None) -> str | None:
    if not text:
        return None
    match = _PURCHASE_RE.search(text)
    if not match:
        return None
    term = match.group(1).lower()
    if "let" in term or "rent" in term or "lease" in term:
        return "Rent"
    return "Sale"
