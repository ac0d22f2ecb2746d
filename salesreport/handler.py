"""Request handling for the refresh and report endpoints."""

from __future__ import annotations

import logging
import os
from http import HTTPStatus
from typing import Any, Callable

from sqlalchemy.exc import SQLAlchemyError

from salesreport.loader import Loader
from salesreport.script import run_csv_loader
from salesreport.service import SalesService
from salesreport.utils import ERROR_PATH, SUCCESS_PATH

logger = logging.getLogger(__name__)

Response = tuple[int, dict[str, Any]]

OK_MESSAGE = "successfully processed the request"


class Handler:
    """Turns endpoint requests into ``(status, body)`` pairs."""

    def __init__(self, loader: Loader, service: SalesService) -> None:
        self.loader = loader
        self.service = service
        self.success_dir: str | os.PathLike[str] = SUCCESS_PATH
        self.error_dir: str | os.PathLike[str] = ERROR_PATH

    def refresh(self) -> Response:
        """Load the pending CSV files into the database."""
        try:
            run_csv_loader(self.loader, self.success_dir, self.error_dir)
        except Exception as exc:
            logger.error("refresh failed: %s", exc)
            return HTTPStatus.BAD_REQUEST, {
                "error": str(exc),
                "message": "failed in processing the request",
            }
        return HTTPStatus.OK, {"error": None, "message": OK_MESSAGE}

    @staticmethod
    def _report(
        query: Callable[[str, str], Any], key: str, start_date: str | None, end_date: str | None
    ) -> Response:
        if not start_date or not end_date:
            return HTTPStatus.BAD_REQUEST, {
                "error": "query is empty",
                "message": "missing start_date or end_date",
            }
        try:
            value = query(start_date, end_date)
        except (ValueError, SQLAlchemyError) as exc:
            return HTTPStatus.BAD_REQUEST, {
                "error": str(exc),
                "message": "could not process the request",
            }
        return HTTPStatus.OK, {"error": None, "message": OK_MESSAGE, "response": {key: value}}

    def total_customers(self, start_date: str | None, end_date: str | None) -> Response:
        return self._report(
            self.service.get_total_customers, "total_customers", start_date, end_date
        )

    def total_orders(self, start_date: str | None, end_date: str | None) -> Response:
        return self._report(self.service.get_total_orders, "total_orders", start_date, end_date)

    def average_value(self, start_date: str | None, end_date: str | None) -> Response:
        return self._report(
            self.service.get_average_value, "average_value", start_date, end_date
        )