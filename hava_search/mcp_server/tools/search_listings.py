"""search_listings tool implementation."""

from __future__ import annotations

from typing import Any

from hava_search.core.query_engine import ListingSearchRequest
from hava_search.storage import SQLiteListingStore


def _format_price(listing: dict[str, Any]) -> str:
    period = listing.get("price_period")
    amount = f"₦{listing['price']:,}"
    return f"{amount}/{period}" if period else amount


def search_listings(
    store: SQLiteListingStore,
    query: str | None = None,
    filters: dict[str, Any] | None = None,
    page: int | None = None,
    limit: int | None = None,
    trace=None,
) -> dict[str, Any]:
    params: dict[str, Any] = dict(filters or {})
    if query:
        params["search"] = query
    if page is not None:
        params["page"] = page
    if limit is not None:
        params["limit"] = limit

    result = store.search(ListingSearchRequest.from_mapping(params), trace=trace)

    lines = []
    for idx, listing in enumerate(result["listings"], start=1):
        where = ", ".join(part for part in (listing["location"], listing["state"]) if part)
        lines.append(f"[{idx}] {listing['title']} - {_format_price(listing)} ({where})")

    return {
        "content": [
            {
                "type": "text",
                "text": "\n".join(lines) if lines else "No listings matched the search.",
            }
        ],
        "structuredContent": result,
    }
