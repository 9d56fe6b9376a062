"""Builds parameterized listing queries from explicit filters and free-text search.

Explicit request parameters always win over values inferred from the search
text. Inferred room counts, prices and property types become strict
conditions; amenities, places, purchase intent and leftover keywords form a
single soft OR group.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Mapping

from hava_search.core.query_engine.amenity_extractor import AMENITY_KEYWORDS
from hava_search.core.query_engine.number_extractor import (
    NUMBER_WORDS,
    NumericConstraint,
    extract_room_constraints,
    land_size_to_sqm,
    parse_number_input,
    strip_room_counts,
)
from hava_search.core.query_engine.price_extractor import (
    PERIOD_SYNONYMS,
    extract_price_range,
    parse_price,
    period_to_monthly,
)
from hava_search.core.query_engine.query_interpreter import InterpretedQuery, QueryInterpreter
from hava_search.core.query_engine.vocabulary import (
    CITY_TO_STATE,
    NOISE_PROPERTY_TYPES,
    PROPERTY_SYNONYMS,
    STATES,
    state_names,
)
from hava_search.core.types import ROOM_FIELDS
from hava_search.observability.logger import get_logger


class ListingQueryError(ValueError):
    """Raised when an explicit search parameter cannot be used as a filter."""


SORT_ORDERS = {
    "price_asc": "l.price ASC",
    "price_desc": "l.price DESC",
    "date_listed_asc": "l.date_listed ASC",
    "date_listed_desc": "l.date_listed DESC",
}
DEFAULT_SORT = "date_listed_desc"

RENTAL_CATEGORIES = ("Rent", "Lease", "Short Let", "Long Let")

# A bare number below this is a count ("3 bedroom flat"), not an asking price.
MIN_BARE_PRICE = 1_000

# Largest value SQLite binds as INTEGER.
MAX_SQL_INT = 2**63 - 1

MONTHLY_PRICE_SQL = (
    "(CASE l.price_period"
    " WHEN 'yearly' THEN l.price / 12.0"
    " WHEN 'monthly' THEN l.price"
    " WHEN 'weekly' THEN l.price * 4.333"
    " WHEN 'nightly' THEN l.price * 30.417"
    " ELSE NULL END)"
)

TEXT_COLUMNS = ("l.title", "l.description", "l.location", "l.state", "l.property_type")

STRUCTURAL_TERMS = frozenset(
    {
        "bed",
        "beds",
        "bedroom",
        "bedrooms",
        "room",
        "rooms",
        "br",
        "bhk",
        "bath",
        "baths",
        "bathroom",
        "bathrooms",
        "toilet",
        "toilets",
        "wc",
        "living",
        "sitting",
        "parlour",
        "parlor",
        "lounge",
        "kitchen",
        "kitchens",
    }
)


def _words(phrases) -> set[str]:
    return {word for phrase in phrases for word in phrase.lower().replace("-", " ").split()}


# Words already turned into structured filters, or carrying no listing content.
FILLER_WORDS = frozenset(
    STRUCTURAL_TERMS
    | set(NUMBER_WORDS)
    | _words(PROPERTY_SYNONYMS)
    | _words(AMENITY_KEYWORDS)
    | _words(CITY_TO_STATE)
    | _words(STATES)
    | _words(synonym for synonyms in PERIOD_SYNONYMS.values() for synonym in synonyms)
    | {
        "a", "an", "the", "in", "at", "on", "of", "with", "near", "around", "and", "or",
        "to", "for", "per", "let", "lease", "rent", "rental", "sale", "buy", "between",
        "under", "below", "less", "than", "above", "over", "greater", "more", "least",
        "most", "minimum", "maximum", "cheaper", "naira", "price", "budget",
    }
)


@dataclass
class ListingSearchRequest:
    """Explicit search parameters, as received from the caller."""

    search: str | None = None
    purchase_category: str | None = None
    min_price: Any = None
    max_price: Any = None
    location: str | None = None
    state: str | None = None
    property_type: str | None = None
    bedrooms: Any = None
    bathrooms: Any = None
    living_rooms: Any = None
    kitchens: Any = None
    land_size: Any = None
    status: str | None = None
    sort_by: str | None = None
    page: Any = None
    limit: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ListingSearchRequest":
        data = data or {}
        known = {f.name for f in fields(cls)}
        # Empty strings mean "not set", as they do for query-string parameters.
        return cls(**{k: v for k, v in data.items() if k in known and v not in ("", None)})


@dataclass(frozen=True)
class ListingQuery:
    sql: str
    params: tuple[Any, ...]
    count_sql: str
    count_params: tuple[Any, ...]
    page: int
    limit: int
    sort: str
    interpretation: InterpretedQuery


def _invalid(name: str, value: Any) -> ListingQueryError:
    if isinstance(value, int):
        # repr() of very long ints is itself limited
        return ListingQueryError(f"Invalid value for {name}: out of range")
    return ListingQueryError(f"Invalid value for {name}: {value!r}")


def _price_param(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise _invalid(name, value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise _invalid(name, value)
        value = round(value)
    elif not isinstance(value, int):
        parsed = parse_price(str(value))
        if parsed is None:
            raise _invalid(name, value)
        value = parsed
    if abs(value) > MAX_SQL_INT:
        raise _invalid(name, value)
    return value


def _positive_int(value: Any, name: str, default: int) -> int:
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise _invalid(name, value) from e
    if number < 1:
        raise ListingQueryError(f"Invalid value for {name}: must be >= 1")
    if number > MAX_SQL_INT:
        raise _invalid(name, number)
    return number


def _room_param(value: Any, name: str) -> NumericConstraint:
    constraint = parse_number_input(value)
    if constraint is None or abs(constraint.value) > MAX_SQL_INT:
        raise _invalid(name, value)
    return constraint


def _land_sqm_param(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            sqm = float(value)
        except OverflowError as e:
            raise _invalid("land_size", value) from e
    else:
        text = str(value).strip()
        sqm = land_size_to_sqm(text)
        if sqm is None:
            try:
                sqm = float(text)
            except ValueError as e:
                raise _invalid("land_size", value) from e
    if not math.isfinite(sqm):
        raise _invalid("land_size", value)
    return sqm


def _like(value: str) -> str:
    return f"%{value}%"


class ListingQueryBuilder:
    """Turns a :class:`ListingSearchRequest` into SQL for the ``listings`` table."""

    def __init__(
        self,
        default_limit: int = 10,
        max_limit: int = 100,
        interpreter: QueryInterpreter | None = None,
    ) -> None:
        self.default_limit = default_limit
        self.max_limit = max_limit
        self.interpreter = interpreter or QueryInterpreter()
        self.logger = get_logger("hava-search.query")

    def build(self, request: ListingSearchRequest, trace=None) -> ListingQuery:
        conditions: list[str] = []
        params: list[Any] = []
        is_land = (request.property_type or "").lower() == "land"

        self._status_conditions(request, conditions, params)
        self._explicit_conditions(request, is_land, conditions, params)

        interpreted = self.interpreter.interpret(request.search, trace=trace)
        room_constraints = {
            column: constraint
            for column, constraint in extract_room_constraints(interpreted.normalized_query).items()
            if column in interpreted.numbers and abs(constraint.value) <= MAX_SQL_INT
        }
        if not interpreted.is_empty:
            self._search_conditions(
                request, interpreted, room_constraints, is_land, conditions, params
            )

        where = f" WHERE {' AND '.join(conditions)}" if conditions else ""

        sort = request.sort_by or interpreted.qualifiers.get("sort") or DEFAULT_SORT
        if sort not in SORT_ORDERS:
            self.logger.warning("Unknown sort %r, using %s", sort, DEFAULT_SORT)
            sort = DEFAULT_SORT
        priority_sql, priority_params = self._priority_order(
            request, interpreted, room_constraints.get("bedrooms")
        )
        order_terms = [priority_sql] if priority_sql else []
        order_terms += [SORT_ORDERS[sort], "l.listing_id DESC"]

        page = _positive_int(request.page, "page", 1)
        limit = min(_positive_int(request.limit, "limit", self.default_limit), self.max_limit)
        offset = (page - 1) * limit
        if offset > MAX_SQL_INT:
            raise ListingQueryError("Invalid value for page: out of range")

        query = ListingQuery(
            sql=(
                f"SELECT l.* FROM listings l{where}"
                f" ORDER BY {', '.join(order_terms)} LIMIT ? OFFSET ?"
            ),
            params=tuple(params) + tuple(priority_params) + (limit, offset),
            count_sql=f"SELECT COUNT(*) FROM listings l{where}",
            count_params=tuple(params),
            page=page,
            limit=limit,
            sort=sort,
            interpretation=interpreted,
        )
        if trace is not None:
            trace.record_stage(
                "query_build",
                {"conditions": len(conditions), "sort": sort, "page": page, "limit": limit},
            )
        return query

    def _status_conditions(
        self, request: ListingSearchRequest, conditions: list[str], params: list[Any]
    ) -> None:
        status = (request.status or "").strip()
        if not status:
            conditions.append("LOWER(l.status) = ?")
            params.append("available")
        elif status.lower() not in ("all", "all statuses"):
            conditions.append("LOWER(l.status) = ?")
            params.append(status.lower())

    def _explicit_conditions(
        self,
        request: ListingSearchRequest,
        is_land: bool,
        conditions: list[str],
        params: list[Any],
    ) -> None:
        if request.purchase_category and request.purchase_category.lower() != "all":
            conditions.append("LOWER(l.purchase_category) = LOWER(?)")
            params.append(request.purchase_category)
        if request.min_price is not None:
            conditions.append("l.price >= ?")
            params.append(_price_param(request.min_price, "min_price"))
        if request.max_price is not None:
            conditions.append("l.price <= ?")
            params.append(_price_param(request.max_price, "max_price"))
        if request.location:
            conditions.append("l.location LIKE ?")
            params.append(_like(request.location))
        if request.state:
            conditions.append("LOWER(l.state) = LOWER(?)")
            params.append(request.state)

        bedrooms = (
            _room_param(request.bedrooms, "bedrooms") if request.bedrooms is not None else None
        )
        property_type = (request.property_type or "").strip()
        # A one-bedroom apartment search also covers self-contained units.
        if (
            property_type.lower() == "apartment"
            and bedrooms is not None
            and bedrooms.operator == "="
            and bedrooms.value == 1
        ):
            conditions.append("l.property_type IN (?, ?)")
            params.extend(["Apartment", "Self-Contain"])
        elif property_type:
            conditions.append("l.property_type LIKE ?")
            params.append(_like(property_type))

        if not is_land:
            for column in ROOM_FIELDS:
                raw = getattr(request, column)
                if raw is None:
                    continue
                constraint = _room_param(raw, column)
                conditions.append(f"l.{column} {constraint.operator} ?")
                params.append(constraint.value)

        if request.land_size is not None:
            conditions.append("l.land_size >= ?")
            params.append(_land_sqm_param(request.land_size))

    def _search_conditions(
        self,
        request: ListingSearchRequest,
        interpreted: InterpretedQuery,
        room_constraints: Mapping[str, NumericConstraint],
        is_land: bool,
        conditions: list[str],
        params: list[Any],
    ) -> None:
        numbers = interpreted.numbers
        if not is_land:
            for column in ROOM_FIELDS:
                if column in room_constraints and getattr(request, column) is None:
                    constraint = room_constraints[column]
                    conditions.append(f"l.{column} {constraint.operator} ?")
                    params.append(constraint.value)

        # "at least 3 bedrooms" bounds the rooms, not the price
        price_range = extract_price_range(strip_room_counts(interpreted.normalized_query))
        if price_range and price_range.get("value", MIN_BARE_PRICE) < MIN_BARE_PRICE:
            price_range = None
        if price_range and any(abs(v) > MAX_SQL_INT for v in price_range.values()):
            price_range = None
        if price_range and request.min_price is None and request.max_price is None:
            self._price_conditions(request, price_range, interpreted.price_period, conditions, params)

        if request.land_size is None and "land_size" in numbers:
            sqm = land_size_to_sqm(numbers["land_size"])
            if sqm is not None:
                conditions.append("COALESCE(l.land_size, 0) >= ?")
                params.append(sqm)

        detected_type = interpreted.property_type
        if detected_type and not request.property_type and detected_type not in NOISE_PROPERTY_TYPES:
            synonyms = [s for s, canonical in PROPERTY_SYNONYMS.items() if canonical == detected_type]
            patterns = [detected_type, *synonyms]
            conditions.append(
                "(" + " OR ".join("l.property_type LIKE ?" for _ in patterns) + ")"
            )
            params.extend(_like(p) for p in patterns)

        tokens = [t.lower() for t in interpreted.keywords]
        if tokens and all(t.isdigit() or t in STRUCTURAL_TERMS or t in NUMBER_WORDS for t in tokens):
            # only counts and room words: the strict room filters say it all
            return

        soft: list[str] = []
        soft_params: list[Any] = []
        for tag in dict.fromkeys(interpreted.amenities):
            soft.append("COALESCE(l.amenities, '') LIKE ?")
            soft_params.append(_like(tag))
        if interpreted.city and not request.location:
            soft.append("l.location LIKE ?")
            soft_params.append(_like(interpreted.city))
        if interpreted.state and not request.state:
            for name in state_names(interpreted.state):
                soft.append("l.state LIKE ?")
                soft_params.append(_like(name))
        if interpreted.purchase_category and not request.purchase_category:
            soft.append("LOWER(l.purchase_category) = LOWER(?)")
            soft_params.append(interpreted.purchase_category)
        for term in self._text_terms(tokens):
            soft.append("(" + " OR ".join(f"{col} LIKE ?" for col in TEXT_COLUMNS) + ")")
            soft_params.extend([_like(term)] * len(TEXT_COLUMNS))

        if soft:
            conditions.append("(" + " OR ".join(soft) + ")")
            params.extend(soft_params)

    def _price_conditions(
        self,
        request: ListingSearchRequest,
        price_range: Mapping[str, int],
        period: str | None,
        conditions: list[str],
        params: list[Any],
    ) -> None:
        if period is None:
            if "min" in price_range:
                conditions.append("l.price >= ?")
                params.append(price_range["min"])
            if "max" in price_range:
                conditions.append("l.price <= ?")
                params.append(price_range["max"])
            if "value" in price_range:
                conditions.append("l.price = ?")
                params.append(price_range["value"])
            return

        if "min" in price_range:
            conditions.append(f"{MONTHLY_PRICE_SQL} >= ?")
            params.append(period_to_monthly(price_range["min"], period))
        if "max" in price_range:
            conditions.append(f"{MONTHLY_PRICE_SQL} <= ?")
            params.append(period_to_monthly(price_range["max"], period))
        if "value" in price_range:
            monthly = period_to_monthly(price_range["value"], period)
            conditions.append(f"{MONTHLY_PRICE_SQL} BETWEEN ? AND ?")
            params.extend([monthly * 0.99, monthly * 1.01])
        if not request.purchase_category:
            conditions.append(
                "l.purchase_category IN (" + ", ".join("?" for _ in RENTAL_CATEGORIES) + ")"
            )
            params.extend(RENTAL_CATEGORIES)

    @staticmethod
    def _text_terms(tokens: list[str]) -> list[str]:
        terms = []
        for token in tokens:
            word = token.strip(".,;:!?()\"'")
            if len(word) < 2 or word in FILLER_WORDS or any(ch.isdigit() for ch in word):
                continue
            terms.append(word)
        return list(dict.fromkeys(terms))

    @staticmethod
    def _priority_order(
        request: ListingSearchRequest,
        interpreted: InterpretedQuery,
        bedrooms: NumericConstraint | None,
    ) -> tuple[str, list[Any]]:
        """Rank listings in the searched state first, tighter matches ahead."""
        if not interpreted.state:
            return "", []

        names = list(state_names(interpreted.state))
        in_state = " OR ".join("l.state LIKE ?" for _ in names)
        if len(names) > 1:
            in_state = f"({in_state})"

        purchase = request.purchase_category or interpreted.purchase_category
        tiers: list[tuple[str, list[Any]]] = []
        if purchase and bedrooms is not None:
            tiers.append(
                (
                    f"{in_state} AND l.purchase_category LIKE ?"
                    f" AND l.bedrooms {bedrooms.operator} ?",
                    [*names, purchase, bedrooms.value],
                )
            )
        if purchase:
            tiers.append((f"{in_state} AND l.purchase_category LIKE ?", [*names, purchase]))
        tiers.append((in_state, names))

        whens = " ".join(f"WHEN {cond} THEN {rank}" for rank, (cond, _) in enumerate(tiers))
        params = [value for _, tier_params in tiers for value in tier_params]
        return f"CASE {whens} ELSE {len(tiers)} END", params
