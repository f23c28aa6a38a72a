from __future__ import annotations

from enum import StrEnum
from typing import NewType

SellerId = NewType("SellerId", int)
TransactionId = NewType("TransactionId", int)


class PaymentType(StrEnum):
    CASH = "CASH"
    CARD = "CARD"
    TRANSFER = "TRANSFER"
