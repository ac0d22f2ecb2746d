"""Command entry point: load configuration, connect, schedule refreshes and serve."""

from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from salesreport.config import ConfigError, load_env
from salesreport.database import connect_to_database
from salesreport.handler import Handler
from salesreport.loader import Loader
from salesreport.repository import Repository
from salesreport.script import RefreshScheduler
from salesreport.server import DEFAULT_HOST, DEFAULT_PORT, start_application
from salesreport.service import SalesService

logger = logging.getLogger(__name__)


def build_handler(dsn: str | None = None) -> Handler:
    """Connect to the database and wire the repository, loader and service together."""
    repo = Repository(connect_to_database(dsn))
    return Handler(Loader(repo), SalesService(repo))


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="salesreport", description="Sales report service")
    parser.add_argument("--env", default=".env", help="environment file to load")
    parser.add_argument("--dsn", default=None, help="database URL (default: $DSN)")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = _parse_args(argv)
    try:
        load_env(args.env)
        handler = build_handler(args.dsn)
    except (ConfigError, ValueError, SQLAlchemyError) as exc:
        logger.error("startup failed: %s", exc)
        return 1

    scheduler = RefreshScheduler(handler.loader)
    scheduler.start()
    try:
        start_application(handler, args.host, args.port)
    finally:
        scheduler.stop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())