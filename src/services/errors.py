from __future__ import annotations

from datetime import date

from domain.base_types import SellerId, TransactionId
from domain.period import Period


class SellerNotFoundError(Exception):
    def __init__(self, *, seller_id: SellerId | None = None, period: Period | None = None) -> None:
        self.seller_id = seller_id
        self.period = period

        message = "Seller"
        if seller_id is not None:
            message += f" with id '{seller_id}'"
        if period is not None:
            message += f" with period '{period}'"
        super().__init__(f"{message} not found")


class TransactionNotFoundError(Exception):
    def __init__(self, transaction_id: TransactionId) -> None:
        self.transaction_id = transaction_id
        super().__init__(f"Transaction with id {transaction_id} was not found")


class InvalidDateWindowError(Exception):
    def __init__(self, *, date_from: date, date_to: date) -> None:
        self.date_from = date_from
        self.date_to = date_to
        super().__init__(f"date_from={date_from.isoformat()} must not be after date_to={date_to.isoformat()}")
