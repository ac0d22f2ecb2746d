"""Sales CSV ingestion into a relational database, with HTTP report endpoints."""

__version__ = "0.1.0"