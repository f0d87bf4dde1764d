"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from pathlib import Path
from urllib.parse import quote

from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "travel_db")
DB_USER: str = os.getenv("DB_USER", "travel_user")
DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")


def build_database_url(user: str, password: str, host: str, port: int, name: str) -> str:
    """Build a postgresql:// URL; credentials may contain URL delimiters like '@', '/' or ':'."""
    return (
        f"postgresql://{quote(user, safe='')}:{quote(password, safe='')}"
        f"@{host}:{port}/{quote(name, safe='')}"
    )


DATABASE_URL: str = build_database_url(DB_USER, DB_PASSWORD, DB_HOST, DB_PORT, DB_NAME)

# ── Startup wait ──────────────────────────────────────────
# Seconds before a single readiness probe gives up.
DB_CONNECT_TIMEOUT: int = int(os.getenv("DB_CONNECT_TIMEOUT", "3"))
DB_WAIT_INTERVAL: float = float(os.getenv("DB_WAIT_INTERVAL", "1"))
# 0 means wait forever.
DB_WAIT_TIMEOUT: float = float(os.getenv("DB_WAIT_TIMEOUT", "0"))

# ── Schema ────────────────────────────────────────────────
SCHEMA_PATH: Path = Path(
    os.getenv("SCHEMA_PATH", str(Path(__file__).resolve().parent / "db" / "schema.sql"))
)

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Currency ──────────────────────────────────────────────
DEFAULT_CURRENCY: str = "AED"
