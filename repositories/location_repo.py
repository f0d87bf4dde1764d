"""
repositories/location_repo.py
------------------------------
Data access layer for geo_locations.
"""

from typing import Optional

from psycopg2 import extras

from db.connection import get_connection, release_connection
from models.geo_location import GeoLocation
from utils.converters import to_float
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = (
    "id, location_name, country, country_code, latitude, longitude, "
    "dest_id, timezone, created_at, updated_at"
)


class LocationRepository:
    """Repository for read operations on the geo_locations table."""

    def get_by_id(self, location_id: int) -> Optional[GeoLocation]:
        sql = f"SELECT {_COLUMNS} FROM geo_locations WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (location_id,))
                row = cur.fetchone()
                return self._row_to_location(row) if row else None
        finally:
            release_connection(conn)

    def get_by_name(self, name: str) -> list[GeoLocation]:
        """
        Fetch every location with the given name (case-insensitive).
        The same name can map to several provider destination IDs.
        """
        sql = f"""
            SELECT {_COLUMNS} FROM geo_locations
            WHERE LOWER(location_name) = LOWER(%s)
            ORDER BY id;
        """
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (name,))
                return [self._row_to_location(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_recent(self, limit: int = 10) -> list[GeoLocation]:
        """Most recently searched locations, newest first."""
        sql = f"SELECT {_COLUMNS} FROM geo_locations ORDER BY created_at DESC, id DESC LIMIT %s;"
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (limit,))
                return [self._row_to_location(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    @staticmethod
    def _row_to_location(row: dict) -> GeoLocation:
        """Convert a database row to a GeoLocation domain object."""
        return GeoLocation(
            id=row["id"],
            location_name=row["location_name"],
            country=row["country"],
            country_code=row["country_code"],
            latitude=to_float(row["latitude"]),
            longitude=to_float(row["longitude"]),
            dest_id=row["dest_id"],
            timezone=row["timezone"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
