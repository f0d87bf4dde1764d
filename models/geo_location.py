"""
models/geo_location.py
----------------------
Domain model for locations resolved from travel searches.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class GeoLocation:
    """
    A searched destination. Flights and attractions belong to one location
    and are deleted with it.

    Attributes:
        id: Database primary key (None for new records).
        location_name: Display name (e.g., 'Dubai').
        country: Country name.
        country_code: Short country code (e.g., 'ae').
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        dest_id: Destination ID of the travel data provider.
        timezone: IANA timezone name (e.g., 'Asia/Dubai').
        created_at: Timestamp when the record was created.
        updated_at: Timestamp of the last update (set by trigger).
    """
    location_name: str
    country: Optional[str] = None
    country_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    dest_id: Optional[str] = None
    timezone: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def __str__(self) -> str:
        if self.country:
            return f"{self.location_name}, {self.country}"
        return self.location_name
