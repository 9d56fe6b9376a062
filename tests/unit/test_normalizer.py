"""Tests for slang/abbreviation normalization."""

import pytest

from hava_search.core.query_engine.normalizer import ABBREVIATIONS, normalize_query


@pytest.mark.unit
class TestNormalizeQuery:
    def test_empty_and_none_return_empty_string(self):
        assert normalize_query("") == ""
        assert normalize_query(None) == ""

    def test_lowercases_input(self):
        assert normalize_query("Duplex In IKOYI") == "duplex in ikoyi"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("flat in ph", "flat in port harcourt"),
            ("duplex abj", "duplex abuja"),
            ("land in lag", "land in lagos"),
            ("selfcon for rent", "self contain for rent"),
            ("self-con in yaba", "self contain in yaba"),
            ("2 bedroom apt", "2 bedroom apartment"),
            ("tolet ikeja", "rent ikeja"),
            ("house in lekki ph1", "house in lekki phase 1"),
            ("office in VI", "office in victoria island"),
        ],
    )
    def test_expands_each_abbreviation(self, raw, expected):
        assert normalize_query(raw) == expected

    def test_does_not_touch_abbreviations_inside_words(self):
        assert normalize_query("graphics studio") == "graphics studio"
        assert normalize_query("village flat") == "village flat"
        assert normalize_query("flagship aptitude") == "flagship aptitude"
        assert normalize_query("self-contained unit") == "self-contained unit"

    def test_abbreviation_next_to_punctuation(self):
        assert normalize_query("flat in ph, near vi.") == (
            "flat in port harcourt, near victoria island."
        )

    def test_every_occurrence_is_replaced(self):
        assert normalize_query("ph or PH") == "port harcourt or port harcourt"

    @pytest.mark.parametrize(
        "raw",
        [
            "3 bedroom self-con in ph between 2m and 4m with parking",
            "Lekki PH1 apt, VI or abj",
            "graphics selfcon tolet lag",
            "",
            "nice flat in lekki",
        ],
    )
    def test_idempotent(self, raw):
        once = normalize_query(raw)
        assert normalize_query(once) == once

    def test_expansions_are_already_normalized(self):
        for expansion in ABBREVIATIONS.values():
            assert normalize_query(expansion) == expansion
