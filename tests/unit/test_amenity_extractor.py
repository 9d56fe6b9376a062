"""Tests for amenity tags and sort qualifiers."""

import pytest

from hava_search.core.query_engine.amenity_extractor import (
    AMENITY_TAGS,
    extract_amenities,
    extract_qualifiers,
)


@pytest.mark.unit
class TestExtractAmenities:
    def test_detects_all_amenities(self):
        result = extract_amenities("gated estate with swimming pool and parking")
        assert {"gated", "estate", "pool", "parking"} <= set(result)

    def test_keeps_table_order(self):
        assert extract_amenities("gated estate with parking and pool") == [
            "pool",
            "parking",
            "gated",
            "estate",
        ]

    def test_duplicate_tags_are_preserved(self):
        # "swimming pool" also contains "pool"
        assert extract_amenities("duplex with swimming pool") == ["pool", "pool"]
        assert extract_amenities("garage and car park") == ["parking", "parking"]

    def test_substring_match(self):
        assert extract_amenities("fully furnished, serviced") == ["furnished", "serviced"]
        assert extract_amenities("unfurnished flat") == ["furnished"]

    def test_synonyms_map_to_canonical_tag(self):
        assert extract_amenities("house with garage") == ["parking"]

    def test_tags_are_canonical(self):
        text = "pool swimming pool parking garage car park furnished serviced gated estate"
        assert set(extract_amenities(text)) == AMENITY_TAGS

    @pytest.mark.parametrize("raw", ["", None, "3 bedroom flat"])
    def test_no_amenities(self, raw):
        assert extract_amenities(raw) == []


@pytest.mark.unit
class TestExtractQualifiers:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("cheap flat", {"sort": "price_asc"}),
            ("affordable duplex", {"sort": "price_asc"}),
            ("luxury apartment", {"sort": "price_desc"}),
            ("expensive penthouse", {"sort": "price_desc"}),
            ("3 bedroom flat", {}),
        ],
    )
    def test_sort_direction(self, text, expected):
        assert extract_qualifiers(text) == expected

    def test_luxury_overrides_cheap(self):
        assert extract_qualifiers("cheap luxury apartment") == {"sort": "price_desc"}
        assert extract_qualifiers("luxury but cheap") == {"sort": "price_desc"}

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty_input(self, raw):
        assert extract_qualifiers(raw) == {}
