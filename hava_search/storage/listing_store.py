"""SQLite-backed listing store with natural-language search."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any, Mapping

from hava_search.core.query_engine.listing_query import ListingQueryBuilder, ListingSearchRequest
from hava_search.core.types import Listing
from hava_search.observability.logger import get_logger

_COLUMNS = (
    "title",
    "description",
    "location",
    "state",
    "property_type",
    "purchase_category",
    "price",
    "price_period",
    "bedrooms",
    "bathrooms",
    "living_rooms",
    "kitchens",
    "land_size",
    "amenities",
    "status",
)


class SQLiteListingStore:
    """Listings table in a local SQLite database (WAL mode)."""

    def __init__(
        self,
        db_path: str = "data/db/listings.db",
        query_builder: ListingQueryBuilder | None = None,
    ) -> None:
        self.db_path = str(db_path)
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.query_builder = query_builder or ListingQueryBuilder()
        self.logger = get_logger("hava-search.store")
        self._init_schema()

    @classmethod
    def from_settings(cls, settings: Any) -> "SQLiteListingStore":
        builder = ListingQueryBuilder(
            default_limit=settings.search.default_limit,
            max_limit=settings.search.max_limit,
        )
        return cls(settings.search.db_path, query_builder=builder)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        try:
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA synchronous=NORMAL")
            return conn
        except Exception:
            conn.close()
            raise

    def _init_schema(self) -> None:
        conn = self._connect()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS listings (
                    listing_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    location TEXT NOT NULL DEFAULT '',
                    state TEXT NOT NULL DEFAULT '',
                    property_type TEXT NOT NULL DEFAULT '',
                    purchase_category TEXT NOT NULL DEFAULT 'Sale',
                    price INTEGER NOT NULL CHECK(price >= 0),
                    price_period TEXT CHECK(
                        price_period IS NULL
                        OR price_period IN ('yearly', 'monthly', 'weekly', 'nightly')
                    ),
                    bedrooms INTEGER,
                    bathrooms INTEGER,
                    living_rooms INTEGER,
                    kitchens INTEGER,
                    land_size REAL,
                    amenities TEXT NOT NULL DEFAULT '',
                    status TEXT NOT NULL DEFAULT 'available',
                    date_listed TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_listings_status ON listings(status)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_listings_price ON listings(price)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_listings_state ON listings(state)")
            conn.commit()
        finally:
            conn.close()

    def add_listing(self, listing: Listing | Mapping[str, Any]) -> int:
        """Insert a listing and return its id."""
        if not isinstance(listing, Listing):
            listing = Listing.from_dict(listing)
        row = listing.to_dict()
        row["amenities"] = ",".join(listing.amenities)

        columns = list(_COLUMNS)
        values = [row[c] for c in columns]
        if listing.date_listed:
            columns.append("date_listed")
            values.append(listing.date_listed)

        conn = self._connect()
        try:
            cursor = conn.execute(
                f"INSERT INTO listings ({', '.join(columns)}) "
                f"VALUES ({', '.join('?' for _ in columns)})",
                values,
            )
            conn.commit()
            listing_id = int(cursor.lastrowid)
        finally:
            conn.close()

        self.logger.info("Stored listing %s (%s)", listing_id, listing.title)
        return listing_id

    def get_listing(self, listing_id: int) -> Listing | None:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT * FROM listings WHERE listing_id = ?", (listing_id,)
            ).fetchone()
        finally:
            conn.close()
        return Listing.from_dict(dict(row)) if row is not None else None

    def search(
        self, request: ListingSearchRequest | Mapping[str, Any] | None = None, trace=None
    ) -> dict[str, Any]:
        """Run a listing search and return one page of results plus the total count."""
        if not isinstance(request, ListingSearchRequest):
            request = ListingSearchRequest.from_mapping(request)

        query = self.query_builder.build(request, trace=trace)
        conn = self._connect()
        try:
            total = conn.execute(query.count_sql, query.count_params).fetchone()[0]
            rows = conn.execute(query.sql, query.params).fetchall()
        finally:
            conn.close()

        listings = [Listing.from_dict(dict(row)).to_dict() for row in rows]
        if trace is not None:
            trace.record_stage("fetch", {"total": total, "returned": len(listings)})

        return {
            "listings": listings,
            "total": total,
            "page": query.page,
            "limit": query.limit,
            "sort": query.sort,
            "interpretation": query.interpretation.to_dict(),
        }
