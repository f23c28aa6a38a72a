from __future__ import annotations

from datetime import date, datetime, time, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .base_types import PaymentType, SellerId, TransactionId


class Transaction(BaseModel):
    """A single sale made by a seller.

    `id` and `seller_id` stay unset until the transaction is persisted.
    """

    model_config = ConfigDict(frozen=True)

    id: TransactionId | None = None
    seller_id: SellerId | None = None
    amount: Decimal
    payment_type: PaymentType
    transaction_date: datetime

    @model_validator(mode="after")
    def _validate_amount(self) -> Transaction:
        if self.amount <= 0:
            raise ValueError("Transaction.amount must be > 0")
        return self


class Seller(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: SellerId | None = None
    name: str
    contact_info: str | None = None
    registration_date: datetime
    transactions: list[Transaction] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_name(self) -> Seller:
        if not self.name:
            raise ValueError("Seller.name must be non-empty")
        return self


class DateWindow(BaseModel):
    """Timestamp range with both bounds inclusive."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @classmethod
    def for_dates(cls, date_from: date, date_to: date) -> DateWindow:
        """Cover whole calendar days, from `date_from` midnight to the last instant of `date_to` (UTC)."""
        return cls(
            start=datetime.combine(date_from, time.min, tzinfo=timezone.utc),
            end=datetime.combine(date_to, time.max, tzinfo=timezone.utc),
        )

    def contains(self, timestamp: datetime) -> bool:
        return self.start <= timestamp <= self.end
