from __future__ import annotations

from datetime import date
from decimal import Decimal


def format_currency(value: Decimal) -> str:
    cents = value.quantize(Decimal("0.01"))
    return f"{cents:.2f}"


def format_date(value: date | None) -> str:
    return value.isoformat() if value is not None else "-"
