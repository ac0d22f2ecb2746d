"""Row model for the sales CSV input files."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

_INT_SHAPE = re.compile(r"[+-]?\d+")


def _column(name: str, default: Any) -> Any:
    return field(default=default, metadata={"column": name})


def _to_int(column: str, raw: str) -> int:
    if not _INT_SHAPE.fullmatch(raw):
        raise ValueError(f"column {column!r}: {raw!r} is not an integer")
    return int(raw)


def _to_float(column: str, raw: str) -> float:
    if raw != raw.strip() or "_" in raw:
        raise ValueError(f"column {column!r}: {raw!r} is not a number")
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"column {column!r}: {raw!r} is not a number") from exc


@dataclass
class CsvOrder:
    """One line of a sales CSV file."""

    order_id: int = _column("Order ID", 0)
    product_id: str = _column("Product ID", "")
    customer_id: str = _column("Customer ID", "")
    product_name: str = _column("Product Name", "")
    category: str = _column("Category", "")
    region: str = _column("Region", "")
    date_of_sale: str = _column("Date of Sale", "")
    quantity_sold: int = _column("Quantity Sold", 0)
    unit_price: float = _column("Unit Price", 0.0)
    discount: float = _column("Discount", 0.0)
    shipping_cost: float = _column("Shipping Cost", 0.0)
    payment_method: str = _column("Payment Method", "")
    customer_name: str = _column("Customer Name", "")
    customer_email: str = _column("Customer Email", "")
    customer_address: str = _column("Customer Address", "")

    @classmethod
    def from_row(cls, row: Mapping[str, str | None]) -> "CsvOrder":
        """Build an order from a header-keyed row; absent or empty cells give zero values."""
        values: dict[str, Any] = {}
        for f in fields(cls):
            column = f.metadata["column"]
            raw = row.get(column)
            if raw is None or raw == "":
                continue
            if f.type in ("int", int):
                values[f.name] = _to_int(column, raw)
            elif f.type in ("float", float):
                values[f.name] = _to_float(column, raw)
            else:
                values[f.name] = raw
        return cls(**values)