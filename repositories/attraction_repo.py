"""
repositories/attraction_repo.py
--------------------------------
Data access layer for attractions and their images and inclusions.
City lookups go through the `get_attractions_by_city()` stored function,
full records through the `v_attractions_full` view.
"""

from typing import Optional

from psycopg2 import extras

from db.connection import get_connection, release_connection
from models.attraction import Attraction, AttractionImage, AttractionInclusion
from utils.converters import to_float
from utils.logger import get_logger

logger = get_logger(__name__)


class AttractionRepository:
    """Repository for read operations on attractions."""

    # ── LOOKUPS ───────────────────────────────────────────

    def get_by_city(self, city: str) -> list[Attraction]:
        """
        Fetch all attractions in a city (case-insensitive).

        Returns:
            List of Attraction objects ordered by rating, then review count,
            both descending with missing values last.
        """
        sql = "SELECT * FROM get_attractions_by_city(%s);"
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (city,))
                attractions = [
                    Attraction(
                        id=r["id"],
                        attraction_name=r["name"],
                        city=r["city"],
                        price=to_float(r["price"]),
                        rating=to_float(r["rating"]),
                        review_count=r["review_count"],
                    )
                    for r in cur.fetchall()
                ]
            logger.info(f"Found {len(attractions)} attractions in '{city}'")
            return attractions
        finally:
            release_connection(conn)

    def get_full(self, city: Optional[str] = None) -> list[Attraction]:
        """
        Fetch attractions with location, images and inclusions.

        Args:
            city: Optional city filter (case-insensitive).
        """
        sql = "SELECT * FROM v_attractions_full"
        params: list = []
        if city:
            sql += " WHERE LOWER(city) = LOWER(%s)"
            params.append(city)
        sql += " ORDER BY rating DESC NULLS LAST, id;"

        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, params)
                return [self._row_to_attraction(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_images(self, attraction_id: int) -> list[AttractionImage]:
        sql = """
            SELECT id, attraction_id, image_url, caption, display_order, created_at
            FROM attraction_images
            WHERE attraction_id = %s
            ORDER BY display_order, id;
        """
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (attraction_id,))
                return [AttractionImage(**r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_inclusions(self, attraction_id: int) -> list[AttractionInclusion]:
        sql = """
            SELECT id, attraction_id, inclusion_text, created_at
            FROM attraction_inclusions
            WHERE attraction_id = %s
            ORDER BY id;
        """
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (attraction_id,))
                return [AttractionInclusion(**r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    # ── REPORTS ───────────────────────────────────────────

    def get_top_rated(self, limit: int = 10) -> list[Attraction]:
        """Best rated attractions overall; ties broken by review count."""
        sql = """
            SELECT id, attraction_name, city, country, price, currency, rating, review_count
            FROM attractions
            WHERE rating IS NOT NULL
            ORDER BY rating DESC, review_count DESC NULLS LAST
            LIMIT %s;
        """
        conn = get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (limit,))
                return [self._row_to_attraction(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def count_by_country(self) -> list[dict]:
        """
        Count attractions per country.

        Returns:
            List of dicts: [{'country': str, 'attraction_count': int,
            'avg_rating': float | None}, ...], largest first.
        """
        sql = """
            SELECT country, COUNT(*) AS attraction_count, AVG(rating) AS avg_rating
            FROM attractions
            GROUP BY country
            ORDER BY attraction_count DESC, country;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [
                    {"country": r[0], "attraction_count": r[1], "avg_rating": to_float(r[2])}
                    for r in cur.fetchall()
                ]
        finally:
            release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_attraction(row: dict) -> Attraction:
        """Convert a table or view row to an Attraction domain object."""
        images = sorted(
            (
                AttractionImage(
                    image_url=img["url"],
                    caption=img.get("caption"),
                    display_order=img.get("order") or 0,
                    attraction_id=row.get("id"),
                )
                for img in row.get("images") or []
            ),
            key=lambda img: img.display_order,
        )
        attraction = Attraction(
            id=row.get("id"),
            attraction_slug=row.get("attraction_slug"),
            attraction_name=row.get("attraction_name"),
            short_description=row.get("short_description"),
            long_description=row.get("long_description"),
            cancellation_policy=row.get("cancellation_policy"),
            price=to_float(row.get("price")),
            rating=to_float(row.get("rating")),
            review_count=row.get("review_count"),
            city=row.get("city"),
            country=row.get("country"),
            geo_location_id=row.get("geo_location_id"),
            location_name=row.get("location_name"),
            images=images,
            inclusions=sorted(row.get("inclusions") or []),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )
        if row.get("currency"):
            attraction.currency = row["currency"]
        return attraction
