"""Storage exports."""

from hava_search.storage.listing_store import SQLiteListingStore

__all__ = ["SQLiteListingStore"]
