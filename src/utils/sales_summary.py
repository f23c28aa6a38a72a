from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from domain.analytics import BestPeriod, window_total
from domain.sales import DateWindow, Seller

from .formatting import format_currency, format_date


@dataclass
class SellerTotal:
    seller_id: int | None
    name: str
    transactions: int
    total: Decimal


def compute_seller_totals(sellers: Iterable[Seller], window: DateWindow) -> list[SellerTotal]:
    """In-window transaction count and amount per seller, in input order."""
    return [
        SellerTotal(
            seller_id=seller.id,
            name=seller.name,
            transactions=sum(1 for transaction in seller.transactions if window.contains(transaction.transaction_date)),
            total=window_total(seller, window),
        )
        for seller in sellers
    ]


def render_seller_totals(title: str, rows: Iterable[SellerTotal]) -> None:
    rows_list = list(rows)
    print(title)
    if not rows_list:
        print("  (no sellers)")
        return

    id_width = max(len("Id"), max((len(str(row.seller_id)) for row in rows_list), default=0))
    name_width = max(len("Seller"), max((len(row.name) for row in rows_list), default=0))
    count_width = max(len("Sales"), max((len(str(row.transactions)) for row in rows_list), default=0))
    total_width = max(len("Total"), max((len(format_currency(row.total)) for row in rows_list), default=0))

    header = f"{'Id':>{id_width}} {'Seller':<{name_width}} {'Sales':>{count_width}} {'Total':>{total_width}}"
    lines = [header, "-" * len(header)]
    for row in rows_list:
        lines.append(
            f"{str(row.seller_id):>{id_width}} "
            f"{row.name:<{name_width}} "
            f"{row.transactions:>{count_width}} "
            f"{format_currency(row.total):>{total_width}}"
        )

    print("\n".join(lines))


def render_best_period(seller: Seller, result: BestPeriod) -> None:
    print(f"Best period for seller {seller.id} ({seller.name}):")
    if result.count == 0:
        print("  (no transactions)")
        return

    print(f"  {format_date(result.start)} → {format_date(result.end)}: {result.count} transactions")
