from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from db import models
from domain.base_types import PaymentType, SellerId, TransactionId
from domain.sales import Seller, Transaction


def _to_utc(timestamp: datetime) -> datetime:
    # SQLite drops the offset, so values are stored as UTC wall time and re-tagged on read.
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def _transaction_to_domain(orm_transaction: models.TransactionOrm) -> Transaction:
    return Transaction(
        id=TransactionId(orm_transaction.id),
        seller_id=SellerId(orm_transaction.seller_id),
        amount=orm_transaction.amount,
        payment_type=PaymentType(orm_transaction.payment_type),
        transaction_date=_to_utc(orm_transaction.transaction_date),
    )


def _transaction_to_orm(transaction: Transaction) -> models.TransactionOrm:
    return models.TransactionOrm(
        amount=transaction.amount,
        payment_type=transaction.payment_type.value,
        transaction_date=_to_utc(transaction.transaction_date),
    )


class SellerRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, seller: Seller) -> Seller:
        orm_seller = models.SellerOrm(
            name=seller.name,
            contact_info=seller.contact_info,
            registration_date=_to_utc(seller.registration_date),
        )
        orm_seller.transactions = [_transaction_to_orm(transaction) for transaction in seller.transactions]

        self._session.add(orm_seller)
        self._session.commit()
        self._session.refresh(orm_seller)
        return self._to_domain(orm_seller)

    def get(self, seller_id: SellerId) -> Seller | None:
        """Load one seller together with its transactions."""
        orm_seller = self._session.get(models.SellerOrm, seller_id)
        if orm_seller is None:
            return None
        return self._to_domain(orm_seller)

    def exists(self, seller_id: SellerId) -> bool:
        return self._session.get(models.SellerOrm, seller_id) is not None

    def list(self) -> list[Seller]:
        """All sellers ordered by id, without their transactions."""
        orm_sellers = self._session.scalars(select(models.SellerOrm).order_by(models.SellerOrm.id.asc())).all()
        return [self._to_domain(orm_seller, with_transactions=False) for orm_seller in orm_sellers]

    def list_with_transactions(self) -> list[Seller]:
        """All sellers ordered by id, with transactions eagerly loaded."""
        stmt = (
            select(models.SellerOrm)
            .options(selectinload(models.SellerOrm.transactions))
            .order_by(models.SellerOrm.id.asc())
        )
        return [self._to_domain(orm_seller) for orm_seller in self._session.scalars(stmt).all()]

    def update(self, seller_id: SellerId, *, name: str | None = None, contact_info: str | None = None) -> Seller | None:
        """Apply the given non-None fields; returns None when the seller does not exist."""
        orm_seller = self._session.get(models.SellerOrm, seller_id)
        if orm_seller is None:
            return None

        if name is not None:
            orm_seller.name = name
        if contact_info is not None:
            orm_seller.contact_info = contact_info

        self._session.commit()
        self._session.refresh(orm_seller)
        return self._to_domain(orm_seller)

    def delete(self, seller_id: SellerId) -> bool:
        """Delete a seller and its transactions; returns False when nothing was deleted."""
        orm_seller = self._session.get(models.SellerOrm, seller_id)
        if orm_seller is None:
            return False

        self._session.delete(orm_seller)
        self._session.commit()
        return True

    @staticmethod
    def _to_domain(orm_seller: models.SellerOrm, *, with_transactions: bool = True) -> Seller:
        transactions = (
            [_transaction_to_domain(transaction) for transaction in orm_seller.transactions]
            if with_transactions
            else []
        )
        return Seller(
            id=SellerId(orm_seller.id),
            name=orm_seller.name,
            contact_info=orm_seller.contact_info,
            registration_date=_to_utc(orm_seller.registration_date),
            transactions=transactions,
        )


class TransactionRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, transaction: Transaction) -> Transaction:
        if transaction.seller_id is None:
            raise ValueError("Transaction.seller_id is required to persist a transaction")

        orm_transaction = _transaction_to_orm(transaction)
        orm_transaction.seller_id = transaction.seller_id

        self._session.add(orm_transaction)
        self._session.commit()
        self._session.refresh(orm_transaction)
        return _transaction_to_domain(orm_transaction)

    def get(self, transaction_id: TransactionId) -> Transaction | None:
        orm_transaction = self._session.get(models.TransactionOrm, transaction_id)
        if orm_transaction is None:
            return None
        return _transaction_to_domain(orm_transaction)

    def list(self) -> list[Transaction]:
        orm_transactions = self._session.scalars(
            select(models.TransactionOrm).order_by(models.TransactionOrm.id.asc())
        ).all()
        return [_transaction_to_domain(orm_transaction) for orm_transaction in orm_transactions]
