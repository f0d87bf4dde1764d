"""
models/attraction.py
--------------------
Domain models for attractions and their images and inclusions.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from config import DEFAULT_CURRENCY


@dataclass
class AttractionImage:
    """One image of an attraction, shown in `display_order`."""
    image_url: str
    caption: Optional[str] = None
    display_order: int = 0
    attraction_id: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass
class AttractionInclusion:
    """One free-text item included with an attraction (e.g., 'Hotel pickup')."""
    inclusion_text: str
    attraction_id: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass
class Attraction:
    """
    A priced point of interest.

    Attributes:
        id: Database primary key (None for new records).
        attraction_slug: Unique slug from the provider.
        attraction_name: Display name.
        price: Ticket price in `currency`.
        rating: Rating out of 5.0.
        review_count: Number of reviews behind the rating.
        city: City name, matched case-insensitively by city lookups.
        location_name: Filled when read from `v_attractions_full`.
        images: Images ordered by display_order (view rows only).
        inclusions: Inclusion texts (view rows only).
    """
    attraction_name: Optional[str] = None
    attraction_slug: Optional[str] = None
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    cancellation_policy: Optional[str] = None
    price: Optional[float] = None
    currency: str = DEFAULT_CURRENCY
    rating: Optional[float] = None
    review_count: Optional[int] = None
    city: Optional[str] = None
    country: Optional[str] = None
    geo_location_id: Optional[int] = None
    location_name: Optional[str] = None
    images: list[AttractionImage] = field(default_factory=list)
    inclusions: list[str] = field(default_factory=list)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __str__(self) -> str:
        rating = f"★{self.rating:.2f}" if self.rating is not None else "unrated"
        price = f"{self.price:.2f} {self.currency}" if self.price is not None else "n/a"
        return f"{self.attraction_name} | {self.city or '-'} | {rating} | {price}"
