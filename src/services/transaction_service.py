from __future__ import annotations

import logging
from decimal import Decimal

from db.repositories import SellerRepository, TransactionRepository
from domain.base_types import PaymentType, SellerId, TransactionId
from domain.sales import Transaction

from .clock import Clock, utc_now
from .errors import SellerNotFoundError, TransactionNotFoundError

logger = logging.getLogger(__name__)


class TransactionService:
    def __init__(
        self,
        transactions: TransactionRepository,
        sellers: SellerRepository,
        *,
        clock: Clock = utc_now,
    ) -> None:
        self._transactions = transactions
        self._sellers = sellers
        self._clock = clock

    def list_transactions(self) -> list[Transaction]:
        return self._transactions.list()

    def get_transaction(self, transaction_id: TransactionId) -> Transaction:
        transaction = self._transactions.get(transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(transaction_id)
        return transaction

    def create_transaction(self, seller_id: SellerId, amount: Decimal, payment_type: PaymentType) -> Transaction:
        """Record a sale for an existing seller, stamped with the current time."""
        if not self._sellers.exists(seller_id):
            raise SellerNotFoundError(seller_id=seller_id)

        transaction = self._transactions.create(
            Transaction(
                seller_id=seller_id,
                amount=amount,
                payment_type=payment_type,
                transaction_date=self._clock(),
            )
        )
        logger.info(
            "Created transaction id=%s seller=%s amount=%s type=%s",
            transaction.id,
            seller_id,
            transaction.amount,
            transaction.payment_type,
        )
        return transaction
