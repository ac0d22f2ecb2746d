"""Report queries that take their date range as ``YYYY-MM-DD`` text."""

from __future__ import annotations

import logging
from datetime import datetime

from salesreport.repository import Repository
from salesreport.utils import parse_date

logger = logging.getLogger(__name__)


class SalesService:
    """Parses report date ranges and asks the repository for the figures."""

    def __init__(self, repo: Repository) -> None:
        self.repo = repo

    @staticmethod
    def _date_range(start_date: str, end_date: str) -> tuple[datetime, datetime]:
        try:
            return parse_date(start_date), parse_date(end_date)
        except ValueError:
            logger.error("could not parse the date range %r to %r", start_date, end_date)
            raise

    def get_total_customers(self, start_date: str, end_date: str) -> int:
        """Distinct customers with orders in the inclusive range.

        Raises ValueError when either date is not in ``YYYY-MM-DD`` form.
        """
        start, end = self._date_range(start_date, end_date)
        return self.repo.get_total_customers(start, end)

    def get_total_orders(self, start_date: str, end_date: str) -> int:
        """Distinct orders in the inclusive range.

        Raises ValueError when either date is not in ``YYYY-MM-DD`` form.
        """
        start, end = self._date_range(start_date, end_date)
        return self.repo.get_total_orders(start, end)

    def get_average_value(self, start_date: str, end_date: str) -> float:
        """Mean order total in the inclusive range, 0 when there are none.

        Raises ValueError when either date is not in ``YYYY-MM-DD`` form.
        """
        start, end = self._date_range(start_date, end_date)
        return self.repo.get_average_value(start, end)