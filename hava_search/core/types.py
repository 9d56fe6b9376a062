"""Core data types for listings.

Rules:
- ``price`` is a non-negative whole amount in naira
- ``price_period`` is None for one-time (sale) prices
- ``land_size`` is stored in square metres
- types are JSON-serializable via to_dict()/from_dict()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

PRICE_PERIODS = ("yearly", "monthly", "weekly", "nightly")
ROOM_FIELDS = ("bedrooms", "bathrooms", "living_rooms", "kitchens")


def _optional_count(value: Any, name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer")
    return value


@dataclass
class Listing:
    """A property listing as stored and returned by the listing store."""

    title: str
    price: int
    location: str = ""
    state: str = ""
    property_type: str = ""
    purchase_category: str = "Sale"
    price_period: str | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    living_rooms: int | None = None
    kitchens: int | None = None
    land_size: float | None = None
    amenities: list[str] = field(default_factory=list)
    description: str = ""
    status: str = "available"
    date_listed: str | None = None
    listing_id: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValueError("title must be a non-empty string")
        if isinstance(self.price, bool) or not isinstance(self.price, int) or self.price < 0:
            raise ValueError("price must be a non-negative integer")
        if self.price_period is not None and self.price_period not in PRICE_PERIODS:
            raise ValueError(f"price_period must be one of {', '.join(PRICE_PERIODS)}")
        for name in ROOM_FIELDS:
            _optional_count(getattr(self, name), name)
        if self.land_size is not None and self.land_size < 0:
            raise ValueError("land_size must be non-negative")
        if not isinstance(self.amenities, list):
            raise ValueError("amenities must be a list")

    def to_dict(self) -> dict[str, Any]:
        return {
            "listing_id": self.listing_id,
            "title": self.title,
            "price": self.price,
            "location": self.location,
            "state": self.state,
            "property_type": self.property_type,
            "purchase_category": self.purchase_category,
            "price_period": self.price_period,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "living_rooms": self.living_rooms,
            "kitchens": self.kitchens,
            "land_size": self.land_size,
            "amenities": list(self.amenities),
            "description": self.description,
            "status": self.status,
            "date_listed": self.date_listed,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Listing":
        amenities = data.get("amenities") or []
        if isinstance(amenities, str):
            amenities = [item.strip() for item in amenities.split(",") if item.strip()]
        land_size = data.get("land_size")
        return cls(
            listing_id=data.get("listing_id"),
            title=str(data.get("title", "")),
            price=data.get("price", 0),
            location=str(data.get("location") or ""),
            state=str(data.get("state") or ""),
            property_type=str(data.get("property_type") or ""),
            purchase_category=str(data.get("purchase_category") or "Sale"),
            price_period=data.get("price_period"),
            bedrooms=data.get("bedrooms"),
            bathrooms=data.get("bathrooms"),
            living_rooms=data.get("living_rooms"),
            kitchens=data.get("kitchens"),
            land_size=float(land_size) if land_size is not None else None,
            amenities=list(amenities),
            description=str(data.get("description") or ""),
            status=str(data.get("status") or "available"),
            date_listed=data.get("date_listed"),
        )
