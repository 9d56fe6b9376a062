"""Free-text search interpretation for the listings search."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from hava_search.core.query_engine.amenity_extractor import extract_amenities, extract_qualifiers
from hava_search.core.query_engine.normalizer import normalize_query
from hava_search.core.query_engine.number_extractor import extract_numbers
from hava_search.core.query_engine.price_extractor import extract_price_period, extract_price_range
from hava_search.core.query_engine.vocabulary import (
    detect_location,
    detect_property_type,
    detect_purchase_category,
    strip_noise_words,
)
from hava_search.observability.logger import get_logger


@dataclass(frozen=True)
class InterpretedQuery:
    original_query: str
    normalized_query: str
    price_range: dict[str, int] | None = None
    price_period: str | None = None
    numbers: dict[str, Any] = field(default_factory=dict)
    amenities: list[str] = field(default_factory=list)
    qualifiers: dict[str, str] = field(default_factory=dict)
    property_type: str | None = None
    city: str | None = None
    state: str | None = None
    purchase_category: str | None = None
    keywords: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.normalized_query

    def to_dict(self) -> dict[str, Any]:
        return {
            "original_query": self.original_query,
            "normalized_query": self.normalized_query,
            "price_range": dict(self.price_range) if self.price_range is not None else None,
            "price_period": self.price_period,
            "numbers": dict(self.numbers),
            "amenities": list(self.amenities),
            "qualifiers": dict(self.qualifiers),
            "property_type": self.property_type,
            "city": self.city,
            "state": self.state,
            "purchase_category": self.purchase_category,
            "keywords": list(self.keywords),
        }


class QueryInterpreter:
    """Normalizes a search string and runs every extractor over the result."""

    def __init__(self) -> None:
        self.logger = get_logger("hava-search.interpreter")

    def interpret(self, query: str | None, trace=None) -> InterpretedQuery:
        original = query if isinstance(query, str) else ""
        normalized = normalize_query(original.strip())
        if not normalized:
            return InterpretedQuery(original_query=original, normalized_query="")

        city, state = detect_location(normalized)
        interpreted = InterpretedQuery(
            original_query=original,
            normalized_query=normalized,
            price_range=extract_price_range(normalized),
            price_period=extract_price_period(normalized),
            numbers=extract_numbers(normalized),
            amenities=extract_amenities(normalized),
            qualifiers=extract_qualifiers(normalized),
            property_type=detect_property_type(normalized),
            city=city,
            state=state,
            purchase_category=detect_purchase_category(normalized),
            keywords=strip_noise_words(normalized).split(),
        )
        self.logger.debug("Interpreted %r as %s", original, interpreted.to_dict())

        if trace is not None:
            trace.record_stage("query_interpretation", interpreted.to_dict())
        return interpreted
