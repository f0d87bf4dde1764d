"""
main.py
-------
Entry point for the travel database tooling.

Commands:
    setup   Wait for PostgreSQL, apply the schema, then run the check (default).
    init    Wait for PostgreSQL and apply the schema only.
    check   Run the diagnostic queries only.
    export  Write a city's attractions (CSV/Excel) or a route's flights (CSV).

Examples:
    python main.py
    python main.py export --city Dubai --format xlsx -o dubai.xlsx
    python main.py export --route JFK DXB -o jfk_dxb.csv
"""

import argparse
import sys
from pathlib import Path

import psycopg2

from db.check_db import run_check
from db.connection import close_pool, init_pool
from db.init_db import main as init_database
from services.export_service import ExportService
from utils.logger import get_logger

logger = get_logger(__name__)


def export(args: argparse.Namespace) -> int:
    """Write the requested export to ``args.output``."""
    service = ExportService()
    try:
        init_pool()
        if args.route:
            buffer = service.export_route_csv(*args.route)
        elif args.format == "xlsx":
            buffer = service.export_city_excel(args.city)
        else:
            buffer = service.export_city_csv(args.city)
    except psycopg2.Error as e:
        logger.error(f"Export failed: {e}")
        return 1
    finally:
        close_pool()

    try:
        Path(args.output).write_bytes(buffer.getvalue())
    except OSError as e:
        logger.error(f"Could not write export to {args.output}: {e}")
        return 1
    logger.info(f"Export written to {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Travel database setup and diagnostics.")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("setup", help="apply the schema, then run the check")
    sub.add_parser("init", help="wait for PostgreSQL and apply the schema")
    sub.add_parser("check", help="run the diagnostic queries")

    export_parser = sub.add_parser("export", help="export attractions or flights")
    target = export_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--city", help="export the attractions of this city")
    target.add_argument("--route", nargs=2, metavar=("FROM", "TO"), help="export flights on a route")
    export_parser.add_argument("--format", choices=("csv", "xlsx"), default="csv")
    export_parser.add_argument("-o", "--output", required=True, help="destination file")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    command = args.command or "setup"

    if command == "init":
        return init_database()
    if command == "check":
        return run_check()
    if command == "export":
        if args.route and args.format == "xlsx":
            logger.error("Route exports are CSV only.")
            return 2
        return export(args)

    # ── setup: init → check ───────────────────────────────
    code = init_database()
    if code != 0:
        return code
    return run_check()


if __name__ == "__main__":
    sys.exit(main())
