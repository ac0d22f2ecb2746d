"""Reading sales CSV files and storing their rows."""

from __future__ import annotations

import csv
import glob
import logging
from typing import Iterable

from salesreport.csvmodel import CsvOrder
from salesreport.repository import Repository
from salesreport.utils import CSV_PATH

logger = logging.getLogger(__name__)


class Loader:
    """Loads order rows from CSV files matching a glob pattern into a repository."""

    def __init__(self, repo: Repository, csv_pattern: str = CSV_PATH) -> None:
        self.repo = repo
        self.csv_pattern = csv_pattern

    def _read_file(self, file_path: str) -> list[CsvOrder] | None:
        try:
            handle = open(file_path, newline="", encoding="utf-8")
        except OSError as exc:
            logger.error("Error opening file %s: %s", file_path, exc)
            return None

        with handle:
            reader = csv.reader(handle)
            try:
                headers = next(reader)
            except (StopIteration, csv.Error, UnicodeDecodeError) as exc:
                logger.error("Error reading headers in file %s: %s", file_path, exc)
                return None

            orders: list[CsvOrder] = []
            try:
                for record in reader:
                    if not record:
                        continue
                    if len(record) != len(headers):
                        break
                    try:
                        orders.append(CsvOrder.from_row(dict(zip(headers, record))))
                    except ValueError:
                        break
            except (csv.Error, UnicodeDecodeError) as exc:
                logger.error("Error decoding CSV file %s: %s", file_path, exc)
            return orders

    def load_csv_files(self) -> dict[str, list[CsvOrder]]:
        """Map each matching file path to the rows read from it.

        Reading a file stops at its first malformed row; files whose header
        cannot be read are left out.
        """
        result: dict[str, list[CsvOrder]] = {}
        for file_path in sorted(glob.glob(self.csv_pattern)):
            logger.info("Processing file: %s", file_path)
            orders = self._read_file(file_path)
            if orders is not None:
                result[file_path] = orders
        return result

    def store_orders(self, orders: Iterable[CsvOrder]) -> None:
        """Store every row with its customer, category, product, region, order and item."""
        for data in orders:
            self.repo.store_customer_data(data)
            category = self.repo.store_category_data(data)
            self.repo.store_product(data, category.category_id)
            region = self.repo.store_region_data(data)
            self.repo.store_order_details(data, region.region_id)
            self.repo.store_order_item(data, data.order_id, data.product_id)