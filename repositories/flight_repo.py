"""
repositories/flight_repo.py
----------------------------
Data access layer for flights.
Route lookups go through the `get_flights_by_route()` stored function,
location lookups through the `v_flights_with_location` view.
"""

from psycopg2 import extras

from db.connection import get_connection, release_connection
from models.flight import Flight
from utils.converters import to_float
from utils.logger import get_logger

logger = get_logger(__name__)


class FlightRepository:
    """Repository for read operations on flights."""

    def get_by_route(self, departure_code: str, arrival_code: str) -> list[Flight]:
        """
        Fetch all flights between two airports, cheapest first.

        Args:
            departure_code: IATA code of the departure airport (e.g., 'JFK').
            arrival_code: IATA code of the arrival airport (e.g., 'DXB').

        Returns:
            List of Flight objects ordered by fare ascending, unpriced last.
        """
        sql = "SELECT * FROM get_flights_by_route(%s, %s);"
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (departure_code, arrival_code))
                flights = [
                    self._row_to_flight(
                        {**r, "departure_airport_code": departure_code,
                         "arrival_airport_code": arrival_code}
                    )
                    for r in cur.fetchall()
                ]
            logger.info(f"Found {len(flights)} flights for {departure_code} → {arrival_code}")
            return flights
        finally:
            release_connection(conn)

    def get_for_location(self, location_name: str) -> list[Flight]:
        """Fetch every flight attached to a location, by departure time."""
        sql = """
            SELECT * FROM v_flights_with_location
            WHERE LOWER(location_name) = LOWER(%s)
            ORDER BY departure_time NULLS LAST, id;
        """
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (location_name,))
                return [self._row_to_flight(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_cheapest(self, limit: int = 10) -> list[Flight]:
        """Cheapest priced flights across all routes."""
        sql = """
            SELECT * FROM flights
            WHERE fare IS NOT NULL
            ORDER BY fare ASC
            LIMIT %s;
        """
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (limit,))
                return [self._row_to_flight(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    @staticmethod
    def _row_to_flight(row: dict) -> Flight:
        """
        Convert a row from any flight source to a Flight.
        Columns missing from the source are left at their defaults.
        """
        flight = Flight(
            id=row.get("id"),
            flight_name=row.get("flight_name"),
            flight_token=row.get("flight_token"),
            flight_number=row.get("flight_number"),
            airline_name=row.get("airline_name"),
            airline_logo=row.get("airline_logo"),
            departure_airport=row.get("departure_airport"),
            departure_airport_code=row.get("departure_airport_code"),
            arrival_airport=row.get("arrival_airport"),
            arrival_airport_code=row.get("arrival_airport_code"),
            departure_time=row.get("departure_time"),
            arrival_time=row.get("arrival_time"),
            duration=row.get("duration"),
            stops=row.get("stops"),
            fare=to_float(row.get("fare")),
            cabin_class=row.get("cabin_class"),
            geo_location_id=row.get("geo_location_id"),
            location_name=row.get("location_name"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )
        if row.get("currency"):
            flight.currency = row["currency"]
        return flight
