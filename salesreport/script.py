"""Moving processed CSV files and the periodic data refresh."""

from __future__ import annotations

import logging
import os
import threading
from datetime import datetime
from pathlib import Path

from salesreport.loader import Loader
from salesreport.utils import (
    ERROR_PATH,
    LOGS_PATH,
    REFRESH_INTERVAL_SECONDS,
    SUCCESS_PATH,
    move_file,
)

logger = logging.getLogger(__name__)

REFRESH_LOG_NAME = "refresh.log"


def run_csv_loader(
    loader: Loader,
    success_dir: str | os.PathLike[str] = SUCCESS_PATH,
    error_dir: str | os.PathLike[str] = ERROR_PATH,
) -> None:
    """Store every loaded file's rows, then move the file to the success or error folder.

    A file whose rows fail to store goes to ``error_dir``. A failed move raises OSError.
    """
    for file_path, orders in loader.load_csv_files().items():
        try:
            loader.store_orders(orders)
        except Exception as exc:  # any storing failure sends the file to the error folder
            logger.error("failed to store %s: %s", file_path, exc)
            move_file(file_path, error_dir)
        else:
            move_file(file_path, success_dir)


def log_refresh_event(
    status: str, details: str, log_dir: str | os.PathLike[str] = LOGS_PATH
) -> Path | None:
    """Append a timestamped ``[status] details`` line to the refresh log.

    Returns the log file path, or None when the log could not be written.
    """
    directory = Path(log_dir)
    log_file = directory / REFRESH_LOG_NAME
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("error creating log directory: %s", exc)
        return None
    stamp = datetime.now().strftime("%Y/%m/%d %H:%M:%S")
    try:
        with open(log_file, "a", encoding="utf-8") as handle:
            handle.write(f"{stamp} [{status}] {details}\n")
    except OSError as exc:
        logger.error("error opening log file: %s", exc)
        return None
    return log_file


class RefreshScheduler:
    """Runs the CSV refresh in a background thread at a fixed interval."""

    def __init__(self, loader: Loader, interval: float = REFRESH_INTERVAL_SECONDS) -> None:
        if interval <= 0:
            raise ValueError("refresh interval must be positive")
        self.loader = loader
        self.interval = float(interval)
        self.success_dir: str | os.PathLike[str] = SUCCESS_PATH
        self.error_dir: str | os.PathLike[str] = ERROR_PATH
        self.log_dir: str | os.PathLike[str] = LOGS_PATH
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> bool:
        """Run one refresh, record it in the refresh log, and report whether it succeeded."""
        logger.info("starting scheduled data refresh...")
        try:
            run_csv_loader(self.loader, self.success_dir, self.error_dir)
        except Exception as exc:
            log_refresh_event("FAILURE", str(exc), self.log_dir)
            logger.error("scheduled data refresh failed: %s", exc)
            return False
        message = "scheduled data refresh completed successfully."
        log_refresh_event("SUCCESS", message, self.log_dir)
        logger.info(message)
        return True

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval):
            self.run_once()

    def start(self) -> None:
        """Begin refreshing every ``interval`` seconds."""
        if self.is_running:
            raise RuntimeError("refresh scheduler is already running")
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stop_event,), name="refresh-scheduler", daemon=True
        )
        self._thread.start()
        logger.info("refresh scheduled every %s seconds", self.interval)

    def stop(self) -> None:
        """Stop the background refresh and wait for a running refresh to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def __enter__(self) -> "RefreshScheduler":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()