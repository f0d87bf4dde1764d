"""
repositories/stats_repo.py
---------------------------
Database-wide numbers: the `v_database_stats` view, table listing and
record counts used by the diagnostic check.
"""

from psycopg2 import extras

from db.check_db import LIST_TABLES_SQL, RECORD_COUNTS_SQL
from db.connection import get_connection, release_connection
from models.stats import DatabaseStats
from utils.converters import to_float
from utils.logger import get_logger

logger = get_logger(__name__)


class StatsRepository:
    """Repository for summary queries."""

    def get_stats(self) -> DatabaseStats:
        sql = "SELECT * FROM v_database_stats;"
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql)
                row = cur.fetchone()
            return DatabaseStats(
                total_locations=row["total_locations"],
                total_flights=row["total_flights"],
                total_attractions=row["total_attractions"],
                total_images=row["total_images"],
                total_inclusions=row["total_inclusions"],
                unique_countries=row["unique_countries"],
                avg_attraction_rating=to_float(row["avg_attraction_rating"]),
                avg_flight_fare=to_float(row["avg_flight_fare"]),
            )
        finally:
            release_connection(conn)

    def list_tables(self) -> list[str]:
        """Base tables in the public schema, alphabetically."""
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(LIST_TABLES_SQL)
                return [r[0] for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_record_counts(self) -> dict:
        """
        Returns:
            Dict with keys 'locations', 'flights', 'attractions'.
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(RECORD_COUNTS_SQL)
                row = cur.fetchone()
                return {"locations": row[0], "flights": row[1], "attractions": row[2]}
        finally:
            release_connection(conn)
