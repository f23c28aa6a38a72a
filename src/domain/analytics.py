"""Read-only analytics over sellers and their transactions.

Every function here is pure: inputs are never mutated and no I/O happens.
Callers are expected to pass fully loaded sellers (transactions included).
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from fractions import Fraction
from typing import Iterable, Sequence

from pydantic import BaseModel

from .sales import DateWindow, Seller, Transaction


class BestPeriod(BaseModel):
    """Densest run of transaction dates for one seller.

    An empty result (`count == 0`, no dates) means the seller has no transactions.
    """

    start: date | None = None
    end: date | None = None
    count: int = 0


def window_total(seller: Seller, window: DateWindow) -> Decimal:
    return sum(
        (transaction.amount for transaction in seller.transactions if window.contains(transaction.transaction_date)),
        start=Decimal(0),
    )


def sellers_under_threshold(sellers: Iterable[Seller], threshold: Decimal, window: DateWindow) -> list[Seller]:
    """Sellers whose in-window total is strictly below `threshold`, in input order.

    Sellers without in-window transactions have a total of zero.
    """
    return [seller for seller in sellers if window_total(seller, window) < threshold]


def top_performer(sellers: Iterable[Seller], window: DateWindow) -> Seller | None:
    """Seller with the greatest in-window total.

    Only sellers with at least one in-window transaction are considered. On equal
    totals the seller seen first wins. Returns None when nobody sold anything.
    """
    best: Seller | None = None
    best_total = Decimal(0)

    for seller in sellers:
        amounts = [
            transaction.amount for transaction in seller.transactions if window.contains(transaction.transaction_date)
        ]
        if not amounts:
            continue

        total = sum(amounts, start=Decimal(0))
        if best is None or total > best_total:
            best = seller
            best_total = total

    return best


def best_period(transactions: Iterable[Transaction]) -> BestPeriod:
    """Find the transaction count and date span maximizing `count**2 / span_days`.

    Dates repeat when several transactions happen on the same day; each one counts
    towards the density while leaving the span unchanged. The first count to reach
    the maximum score wins. Cost is quadratic in the number of transactions.
    """
    dates = sorted(transaction.transaction_date.date() for transaction in transactions)

    result = BestPeriod()
    best_score = Fraction(0)

    for count in range(1, len(dates) + 1):
        span_days, start, end = _shortest_span(dates, count)
        score = Fraction(count * count, span_days)
        if score > best_score:
            best_score = score
            result = BestPeriod(start=start, end=end, count=count)

    return result


def _shortest_span(dates: Sequence[date], count: int) -> tuple[int, date, date]:
    """Shortest span (in days, inclusive) covering `count` consecutive sorted dates.

    Equal spans replace the current candidate, so the latest minimal window is kept.
    """
    span_days = (dates[count - 1] - dates[0]).days + 1
    start, end = dates[0], dates[count - 1]

    for offset in range(1, len(dates) - count + 1):
        candidate = (dates[offset + count - 1] - dates[offset]).days + 1
        if candidate <= span_days:
            span_days = candidate
            start, end = dates[offset], dates[offset + count - 1]

    return span_days, start, end
