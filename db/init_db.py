"""
db/init_db.py
-------------
Waits for PostgreSQL to accept connections, then applies db/schema.sql.
Run this module directly to (re)initialize the database:
    python -m db.init_db

WARNING: the schema drops and recreates every table.
"""

import time
from pathlib import Path

import psycopg2
from psycopg2.sql import SQL, Identifier

from config import (
    DATABASE_URL,
    DB_CONNECT_TIMEOUT,
    DB_USER,
    DB_WAIT_INTERVAL,
    DB_WAIT_TIMEOUT,
    SCHEMA_PATH,
)
from db.connection import close_pool, get_connection, init_pool, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

GRANT_STATEMENTS = (
    "GRANT ALL PRIVILEGES ON ALL TABLES IN SCHEMA public TO {role}",
    "GRANT ALL PRIVILEGES ON ALL SEQUENCES IN SCHEMA public TO {role}",
    "GRANT EXECUTE ON ALL FUNCTIONS IN SCHEMA public TO {role}",
)

SCHEMA_SUMMARY_SQL = """
    SELECT
        (SELECT COUNT(*) FROM information_schema.tables
          WHERE table_schema = 'public' AND table_type = 'BASE TABLE') AS tables,
        (SELECT COUNT(*) FROM information_schema.views
          WHERE table_schema = 'public') AS views,
        (SELECT COUNT(*) FROM pg_proc p
           JOIN pg_namespace n ON n.oid = p.pronamespace
          WHERE n.nspname = 'public' AND p.proretset) AS functions,
        (SELECT COUNT(*) FROM pg_indexes
          WHERE schemaname = 'public' AND indexname LIKE 'idx\\_%') AS indexes,
        (SELECT COUNT(*) FROM pg_trigger t
           JOIN pg_class c ON c.oid = t.tgrelid
           JOIN pg_namespace n ON n.oid = c.relnamespace
          WHERE n.nspname = 'public' AND NOT t.tgisinternal) AS triggers;
"""


# The server is up but refused us: waiting longer will not help.
ACCESS_ERROR_MARKERS = (
    "password authentication failed",
    "does not exist",
    "no pg_hba.conf entry",
    "permission denied",
)


class DatabaseNotReadyError(Exception):
    """Raised when PostgreSQL did not come up within DB_WAIT_TIMEOUT."""


class DatabaseAccessError(Exception):
    """Raised when PostgreSQL is up but rejects the configured login or database."""


def is_access_error(error: psycopg2.OperationalError) -> bool:
    message = str(error).lower()
    return any(marker in message for marker in ACCESS_ERROR_MARKERS)


def wait_for_database(
    dsn: str | None = None,
    interval: float = DB_WAIT_INTERVAL,
    timeout: float = DB_WAIT_TIMEOUT,
) -> int:
    """
    Block until PostgreSQL accepts a connection.

    Each probe opens and immediately closes a plain connection. A
    ``timeout`` of 0 waits forever.

    Returns:
        The number of probes it took.

    Raises:
        DatabaseNotReadyError: If ``timeout`` is positive and has elapsed.
        DatabaseAccessError: If the server answers but rejects the login
            or the database name.
    """
    started = time.monotonic()
    attempts = 0
    while True:
        attempts += 1
        try:
            conn = psycopg2.connect(dsn or DATABASE_URL, connect_timeout=DB_CONNECT_TIMEOUT)
        except psycopg2.OperationalError as e:
            reason = str(e).strip()
            if is_access_error(e):
                raise DatabaseAccessError(f"PostgreSQL is up but refused the connection: {reason}") from e
            elapsed = time.monotonic() - started
            if timeout > 0 and elapsed >= timeout:
                raise DatabaseNotReadyError(
                    f"PostgreSQL not ready after {attempts} attempts ({elapsed:.1f}s): {reason}"
                ) from e
            logger.info(
                f"PostgreSQL is not ready yet (attempt {attempts}): {reason}. Retrying in {interval}s..."
            )
            time.sleep(interval)
            continue
        conn.close()
        logger.info("PostgreSQL is ready!")
        return attempts


def load_schema(path: Path = SCHEMA_PATH) -> str:
    """Read the schema file, refusing an empty one."""
    sql = Path(path).read_text(encoding="utf-8")
    if not sql.strip():
        raise ValueError(f"Schema file is empty: {path}")
    return sql


def apply_schema(path: Path = SCHEMA_PATH, role: str | None = DB_USER) -> None:
    """
    Execute the schema file as a single batch and grant privileges to ``role``.

    Everything runs in one transaction: any error rolls back and is re-raised.
    """
    schema_sql = load_schema(path)
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(schema_sql)
            if role:
                for statement in GRANT_STATEMENTS:
                    cur.execute(SQL(statement).format(role=Identifier(role)))
        conn.commit()
        logger.info(f"Database schema applied from {path}")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to apply schema: {e}")
        raise
    finally:
        release_connection(conn)


def summarize_schema() -> dict:
    """
    Count the objects in the public schema.

    Returns:
        Dict with keys 'tables', 'views', 'functions', 'indexes', 'triggers'.
        Only set-returning functions and ``idx_*`` indexes are counted.
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SUMMARY_SQL)
            row = cur.fetchone()
            return {
                "tables": row[0],
                "views": row[1],
                "functions": row[2],
                "indexes": row[3],
                "triggers": row[4],
            }
    finally:
        release_connection(conn)


def main() -> int:
    """Wait for the server, apply the schema, log what was created."""
    logger.info("Waiting for PostgreSQL to start...")
    try:
        wait_for_database()
    except (DatabaseNotReadyError, DatabaseAccessError) as e:
        logger.error(str(e))
        return 1

    logger.info("Setting up database schema...")
    try:
        init_pool(min_conn=1, max_conn=1)
        apply_schema()
        summary = summarize_schema()
    except (psycopg2.Error, OSError, ValueError) as e:
        logger.error(f"Database setup failed: {e}")
        return 1
    finally:
        close_pool()

    logger.info(
        f"Created {summary['tables']} tables, {summary['indexes']} indexes, "
        f"{summary['views']} views, {summary['functions']} functions, "
        f"{summary['triggers']} triggers."
    )
    logger.info("Database setup complete!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
