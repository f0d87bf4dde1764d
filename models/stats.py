"""
models/stats.py
---------------
Summary numbers read from the `v_database_stats` view.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class DatabaseStats:
    """
    Database-wide counts and averages.

    Attributes:
        total_locations: Rows in geo_locations.
        total_flights: Rows in flights.
        total_attractions: Rows in attractions.
        total_images: Rows in attraction_images.
        total_inclusions: Rows in attraction_inclusions.
        unique_countries: Distinct countries among locations.
        avg_attraction_rating: Mean rating of rated attractions (None if none).
        avg_flight_fare: Mean fare of priced flights (None if none).
    """
    total_locations: int = 0
    total_flights: int = 0
    total_attractions: int = 0
    total_images: int = 0
    total_inclusions: int = 0
    unique_countries: int = 0
    avg_attraction_rating: Optional[float] = None
    avg_flight_fare: Optional[float] = None

    def is_empty(self) -> bool:
        return not (self.total_locations or self.total_flights or self.total_attractions)
