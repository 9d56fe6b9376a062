"""Tests for room-count/land-size extraction and explicit numeric filters."""

import pytest

from hava_search.core.query_engine.number_extractor import (
    NumericConstraint,
    extract_numbers,
    extract_room_constraints,
    land_size_to_sqm,
    parse_number_input,
    strip_room_counts,
)


@pytest.mark.unit
class TestExtractNumbers:
    def test_word_and_digit_bedrooms_are_equal(self):
        assert extract_numbers("three bedroom flat") == {"bedrooms": 3}
        assert extract_numbers("3 bedroom flat") == {"bedrooms": 3}

    def test_independent_fields(self):
        assert extract_numbers("4 bedroom 2 bath flat with 600 sqm land") == {
            "bedrooms": 4,
            "bathrooms": 2,
            "land_size": "600 sqm",
        }

    @pytest.mark.parametrize("text", ["2 bath", "2 toilet", "2 wc", "two bathrooms", "2toilets"])
    def test_bathroom_terms(self, text):
        assert extract_numbers(text) == {"bathrooms": 2}

    def test_bed_without_space(self):
        assert extract_numbers("5bed duplex") == {"bedrooms": 5}

    def test_ten_and_multi_digit_counts(self):
        assert extract_numbers("ten bedroom mansion") == {"bedrooms": 10}
        assert extract_numbers("12 bedroom hotel") == {"bedrooms": 12}

    def test_number_word_inside_other_word_is_ignored(self):
        assert extract_numbers("often bedroom") == {}

    def test_living_rooms_and_kitchens(self):
        assert extract_numbers("2 living room, one kitchen, 3 bed") == {
            "bedrooms": 3,
            "living_rooms": 2,
            "kitchens": 1,
        }
        assert extract_numbers("two parlour duplex") == {"living_rooms": 2}

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("plot of 600sqm", "600 sqm"),
            ("2 acres in epe", "2 acre"),
            ("5 hectare farmland", "5 hectare"),
        ],
    )
    def test_land_size_literal(self, text, expected):
        assert extract_numbers(text) == {"land_size": expected}

    def test_land_size_needs_digits(self):
        assert extract_numbers("two acre farm") == {}

    def test_no_match_returns_empty_dict(self):
        assert extract_numbers("nice flat in lekki") == {}

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty_input(self, raw):
        assert extract_numbers(raw) == {}

    def test_uppercase_input(self):
        assert extract_numbers("THREE BEDROOM") == {"bedrooms": 3}

    def test_overlong_digit_run_is_no_match(self):
        assert extract_numbers("1" * 5000 + " bedroom flat") == {}
        assert extract_numbers("1" * 5000 + " bedroom 2 bath") == {"bathrooms": 2}


@pytest.mark.unit
class TestParseNumberInput:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("3", NumericConstraint("=", 3)),
            (3, NumericConstraint("=", 3)),
            ("two", NumericConstraint("=", 2)),
            (">= 2", NumericConstraint(">=", 2)),
            ("<4", NumericConstraint("<", 4)),
            ("at least 2", NumericConstraint(">=", 2)),
            ("minimum three", NumericConstraint(">=", 3)),
            ("at most 5", NumericConstraint("<=", 5)),
            ("more than 1", NumericConstraint(">", 1)),
            ("under 4", NumericConstraint("<", 4)),
            ("  = 6 ", NumericConstraint("=", 6)),
        ],
    )
    def test_parses_operator_and_value(self, raw, expected):
        assert parse_number_input(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "many", ">= lots", "2 or 3", True])
    def test_invalid_returns_none(self, raw):
        assert parse_number_input(raw) is None

    def test_overlong_digit_string_is_invalid(self):
        assert parse_number_input("9" * 5000) is None
        assert parse_number_input(">= " + "9" * 5000) is None

    def test_to_dict(self):
        assert NumericConstraint(">=", 2).to_dict() == {"operator": ">=", "value": 2}


@pytest.mark.unit
class TestLandSizeToSqm:
    def test_units(self):
        assert land_size_to_sqm("600 sqm") == 600
        assert land_size_to_sqm("450 square metres") == 450
        assert land_size_to_sqm("1 acre") == pytest.approx(4046.8564224)
        assert land_size_to_sqm("2 hectares") == 20_000
        assert land_size_to_sqm("1.5 ha") == 15_000

    @pytest.mark.parametrize("raw", [None, "", "big plot", "600"])
    def test_unrecognised_returns_none(self, raw):
        assert land_size_to_sqm(raw) is None


@pytest.mark.unit
class TestRoomConstraints:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("at least 3 bedrooms in lekki", {"bedrooms": NumericConstraint(">=", 3)}),
            ("less than 3 bedrooms", {"bedrooms": NumericConstraint("<", 3)}),
            ("maximum two bathrooms", {"bathrooms": NumericConstraint("<=", 2)}),
            ("more than 2 toilets", {"bathrooms": NumericConstraint(">", 2)}),
            ("3 bedroom flat", {"bedrooms": NumericConstraint("=", 3)}),
            ("flat under 20m with 3 bedrooms", {"bedrooms": NumericConstraint("=", 3)}),
            (
                "4 bedroom duplex with at least 3 bath",
                {
                    "bedrooms": NumericConstraint("=", 4),
                    "bathrooms": NumericConstraint(">=", 3),
                },
            ),
        ],
    )
    def test_reads_comparison_in_front_of_count(self, text, expected):
        assert extract_room_constraints(text) == expected

    @pytest.mark.parametrize("raw", [None, "", "flat under 20m", "1" * 5000 + " bedroom"])
    def test_no_constraints(self, raw):
        assert extract_room_constraints(raw) == {}

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("at least 3 bedrooms under 20m", "under 20m"),
            ("3 bedroom flat in lekki", "flat in lekki"),
            ("duplex between 50m and 80m", "duplex between 50m and 80m"),
            ("", ""),
        ],
    )
    def test_strip_room_counts(self, text, expected):
        assert strip_room_counts(text) == expected
