"""
Query Engine Module.

This package turns free-text listing searches into filters:
- Normalization of slang and abbreviations
- Price, room-count, amenity and qualifier extraction
- Vocabulary detection (property type, location, purchase intent)
- SQL query building for the listings table
"""

from hava_search.core.query_engine.amenity_extractor import extract_amenities, extract_qualifiers
from hava_search.core.query_engine.listing_query import (
    ListingQuery,
    ListingQueryBuilder,
    ListingQueryError,
    ListingSearchRequest,
)
from hava_search.core.query_engine.normalizer import normalize_query
from hava_search.core.query_engine.number_extractor import (
    NumericConstraint,
    extract_numbers,
    extract_room_constraints,
    land_size_to_sqm,
    parse_number_input,
    strip_room_counts,
)
from hava_search.core.query_engine.price_extractor import (
    extract_price_period,
    extract_price_range,
    parse_price,
    period_to_monthly,
)
from hava_search.core.query_engine.query_interpreter import InterpretedQuery, QueryInterpreter
from hava_search.core.query_engine.vocabulary import (
    NOISE_WORDS,
    detect_location,
    detect_property_type,
    detect_purchase_category,
    strip_noise_words,
)

__all__ = [
    "normalize_query",
    "parse_price",
    "extract_price_range",
    "extract_price_period",
    "period_to_monthly",
    "extract_numbers",
    "extract_room_constraints",
    "strip_room_counts",
    "parse_number_input",
    "land_size_to_sqm",
    "NumericConstraint",
    "extract_amenities",
    "extract_qualifiers",
    "NOISE_WORDS",
    "strip_noise_words",
    "detect_property_type",
    "detect_location",
    "detect_purchase_category",
    "InterpretedQuery",
    "QueryInterpreter",
    "ListingQuery",
    "ListingQueryBuilder",
    "ListingQueryError",
    "ListingSearchRequest",
]
