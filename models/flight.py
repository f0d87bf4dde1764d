"""
models/flight.py
----------------
Domain model for priced flight offers.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from config import DEFAULT_CURRENCY


@dataclass
class Flight:
    """
    A priced itinerary between two airports.

    Rows read through `get_flights_by_route()` only carry the route columns
    (name, times, duration, fare, stops); the rest stay None.
    `location_name` is filled when the row comes from `v_flights_with_location`.
    """
    flight_name: Optional[str] = None
    flight_token: Optional[str] = None
    flight_number: Optional[str] = None
    airline_name: Optional[str] = None
    airline_logo: Optional[str] = None
    departure_airport: Optional[str] = None
    departure_airport_code: Optional[str] = None
    arrival_airport: Optional[str] = None
    arrival_airport_code: Optional[str] = None
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None
    duration: Optional[str] = None
    stops: Optional[int] = 0
    fare: Optional[float] = None
    currency: str = DEFAULT_CURRENCY
    cabin_class: Optional[str] = None
    geo_location_id: Optional[int] = None
    location_name: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_direct(self) -> bool:
        """Returns True if the flight has no stops."""
        return self.stops == 0

    @property
    def route(self) -> str:
        return f"{self.departure_airport_code or '?'} → {self.arrival_airport_code or '?'}"

    def __str__(self) -> str:
        fare = f"{self.fare:.2f} {self.currency}" if self.fare is not None else "n/a"
        return f"{self.flight_name or 'Flight'} | {self.route} | {fare}"
