"""Create the mediapool schema for ``MEDIAPOOL_DATABASE_URL``."""

from __future__ import annotations

import argparse
import sys

from sqlalchemy import create_engine

from mediapool.config import load_config
from mediapool.db.db_init import init_db


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create media tables.")
    parser.add_argument("--database-url", help="Override MEDIAPOOL_DATABASE_URL.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or [])
    database_url = args.database_url or load_config().database_url
    try:
        init_db(create_engine(database_url, future=True))
    except Exception as exc:
        print(f"init failed: {exc}", file=sys.stderr)
        return 2
    print(f"database initialized: {database_url}", file=sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
