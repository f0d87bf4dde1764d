"""
db/check_db.py
--------------
Connectivity check for a freshly initialized database.
Prints the server time, the tables in `public` and the record counts,
then exits 0. Any connection or query error exits 1.
    python -m db.check_db
"""

import psycopg2

from config import DB_HOST, DB_NAME, DB_USER
from db.connection import close_pool, get_connection, init_pool, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

LIST_TABLES_SQL = """
    SELECT table_name
    FROM information_schema.tables
    WHERE table_schema = 'public' AND table_type = 'BASE TABLE'
    ORDER BY table_name;
"""

RECORD_COUNTS_SQL = """
    SELECT
        (SELECT COUNT(*) FROM geo_locations) AS locations,
        (SELECT COUNT(*) FROM flights) AS flights,
        (SELECT COUNT(*) FROM attractions) AS attractions;
"""

TROUBLESHOOTING = (
    "\nTroubleshooting:\n"
    "1. Make sure PostgreSQL is running: sudo service postgresql status\n"
    "2. Check your .env file has correct credentials\n"
    "3. Verify user has access: psql -U {user} -d {name} -h {host}"
)


def run_check() -> int:
    """
    Run the diagnostic queries on one pooled connection.

    Returns:
        Process exit code: 0 on success, 1 on any database error.
    """
    try:
        init_pool(min_conn=1, max_conn=1)
        conn = get_connection()
        try:
            print("✅ Connected to PostgreSQL database successfully!")
            print(f"📊 Database: {DB_NAME}")
            print(f"👤 User: {DB_USER}")

            with conn.cursor() as cur:
                cur.execute("SELECT NOW();")
                print(f"⏰ Server time: {cur.fetchone()[0]}")

                cur.execute(LIST_TABLES_SQL)
                print("\n📋 Available tables:")
                for (table_name,) in cur.fetchall():
                    print(f"   ✓ {table_name}")

                cur.execute(RECORD_COUNTS_SQL)
                locations, flights, attractions = cur.fetchone()

            print("\n📊 Record counts:")
            print(f"   Locations: {locations}")
            print(f"   Flights: {flights}")
            print(f"   Attractions: {attractions}")
            print("\n🎉 Database setup is complete and ready to use!")
        finally:
            release_connection(conn)
    except psycopg2.Error as e:
        logger.error(f"Database check failed: {e}")
        print(f"❌ Database connection error: {e}")
        print(TROUBLESHOOTING.format(user=DB_USER, name=DB_NAME, host=DB_HOST))
        return 1
    finally:
        close_pool()
    return 0


if __name__ == "__main__":
    raise SystemExit(run_check())
