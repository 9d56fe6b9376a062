"""Tests for the query interpreter facade."""

import pytest

from hava_search.core.query_engine import (
    QueryInterpreter,
    extract_amenities,
    extract_numbers,
    extract_price_range,
    extract_qualifiers,
    normalize_query,
)
from hava_search.core.trace import TraceContext


@pytest.fixture
def interpreter() -> QueryInterpreter:
    return QueryInterpreter()


@pytest.mark.unit
class TestQueryInterpreter:
    def test_end_to_end_scenario(self, interpreter):
        result = interpreter.interpret("3 bedroom self-con in ph between 2m and 4m with parking")

        assert result.normalized_query == (
            "3 bedroom self contain in port harcourt between 2m and 4m with parking"
        )
        assert result.numbers == {"bedrooms": 3}
        assert result.price_range == {"min": 2_000_000, "max": 4_000_000}
        assert result.amenities == ["parking"]
        assert result.qualifiers == {}
        assert result.property_type == "Self-Contain"
        assert result.city == "port harcourt"
        assert result.state == "Rivers"
        assert result.purchase_category is None
        assert result.price_period is None

    def test_matches_individual_passes(self, interpreter):
        raw = "Luxury 4 bedroom duplex with pool in Lekki under 150m"
        normalized = normalize_query(raw)
        result = interpreter.interpret(raw)

        assert result.original_query == raw
        assert result.normalized_query == normalized
        assert result.price_range == extract_price_range(normalized)
        assert result.numbers == extract_numbers(normalized)
        assert result.amenities == extract_amenities(normalized)
        assert result.qualifiers == extract_qualifiers(normalized)

    def test_rental_with_period(self, interpreter):
        result = interpreter.interpret("cheap selfcon tolet in yaba under 400k per annum")

        assert result.purchase_category == "Rent"
        assert result.price_range == {"max": 400_000}
        assert result.price_period == "yearly"
        assert result.qualifiers == {"sort": "price_asc"}
        assert result.city == "yaba"

    def test_keywords_drop_noise_words(self, interpreter):
        result = interpreter.interpret("Nice modern flat in Lekki")
        assert result.keywords == ["flat", "in", "lekki"]

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty_input(self, interpreter, raw):
        result = interpreter.interpret(raw)

        assert result.is_empty
        assert result.normalized_query == ""
        assert result.price_range is None
        assert result.numbers == {}
        assert result.amenities == []
        assert result.qualifiers == {}
        assert result.keywords == []

    def test_non_string_input_is_treated_as_empty(self, interpreter):
        assert interpreter.interpret(42).is_empty

    def test_to_dict_is_a_copy(self, interpreter):
        result = interpreter.interpret("duplex with pool")
        data = result.to_dict()
        data["amenities"].append("gated")

        assert result.amenities == ["pool"]
        assert data["normalized_query"] == "duplex with pool"
        assert data["property_type"] == "Duplex"

    def test_records_trace_stage(self, interpreter):
        trace = TraceContext(user_query="2 bedroom flat")
        interpreter.interpret("2 bedroom flat", trace=trace)

        stage = trace.get_stage_data("query_interpretation")
        assert stage is not None
        assert stage["data"]["numbers"] == {"bedrooms": 2}

    @pytest.mark.parametrize("raw", ["1" * 5000 + " bath", "1" * 5000 + " bedroom flat in ph"])
    def test_overlong_digit_runs_do_not_raise(self, interpreter, raw):
        result = interpreter.interpret(raw)

        assert "bathrooms" not in result.numbers
        assert "bedrooms" not in result.numbers
