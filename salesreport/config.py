"""Environment configuration loading."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when the environment file cannot be loaded."""


def load_env(path: str | os.PathLike[str] = ".env") -> None:
    """Load variables from an env file without overriding ones already set."""
    if not os.path.isfile(path):
        logger.error("failed to load the env file %s", path)
        raise ConfigError(f"failed to load the env file: {os.fspath(path)!r} not found")
    try:
        load_dotenv(path, override=False)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"failed to load the env file: {exc}") from exc