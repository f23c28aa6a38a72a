from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import cast

from pydantic import BaseModel, Field

from domain.base_types import PaymentType, SellerId, TransactionId
from domain.sales import Seller, Transaction


class NewSellerPayload(BaseModel):
    name: str = Field(min_length=3, max_length=50)
    contact_info: str | None = Field(default=None, min_length=5, max_length=100)


class UpdateSellerPayload(BaseModel):
    name: str | None = Field(default=None, min_length=3, max_length=50)
    contact_info: str | None = Field(default=None, min_length=5, max_length=100)


class NewTransactionPayload(BaseModel):
    seller_id: SellerId
    amount: Decimal = Field(gt=0)
    # Resolved case-insensitively by the endpoint so that unknown values map to 400.
    payment_type: str


class TransactionView(BaseModel):
    id: TransactionId
    amount: Decimal
    payment_type: PaymentType
    transaction_date: datetime
    seller_id: SellerId

    @classmethod
    def from_domain(cls, transaction: Transaction) -> TransactionView:
        return cls.model_validate(transaction.model_dump())


class SellerView(BaseModel):
    id: SellerId
    name: str
    contact_info: str | None = None
    registration_date: datetime
    transactions: list[TransactionView] | None = None

    @classmethod
    def from_domain(cls, seller: Seller, *, with_transactions: bool = False) -> SellerView:
        return cls(
            id=cast(SellerId, seller.id),
            name=seller.name,
            contact_info=seller.contact_info,
            registration_date=seller.registration_date,
            transactions=(
                [TransactionView.from_domain(transaction) for transaction in seller.transactions]
                if with_transactions
                else None
            ),
        )
