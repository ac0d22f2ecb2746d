"""Database connection and schema creation."""

from __future__ import annotations

import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from salesreport.dbmodel import Base

logger = logging.getLogger(__name__)


def connect_to_database(dsn: str | None = None) -> sessionmaker[Session]:
    """Connect to ``dsn`` (or the ``DSN`` variable), create the tables, return a session factory."""
    if dsn is None:
        dsn = os.environ.get("DSN")
    if not dsn:
        raise ValueError("no database DSN given and DSN is not set in the environment")

    url = make_url(dsn)
    options: dict = {}
    if url.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool

    engine = create_engine(url, **options)
    Base.metadata.create_all(engine)
    logger.info("successfully connected to the database")
    return sessionmaker(bind=engine, expire_on_commit=False)