from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from random import Random

from domain.base_types import PaymentType
from domain.sales import Seller, Transaction

SELLER_NAMES = [
    "Alberto Mayert",
    "Elmer Runte",
    "Christina Zieme",
    "Lorna Hegmann",
    "Dewey Kuhic",
    "Ivy Schowalter",
    "Marcus Lind",
    "Nadia Crooks",
]


def build_demo_seller(rng: Random, name: str, *, now: datetime, days: int, max_transactions: int) -> Seller:
    """Random seller registered before `now` with sales spread over the preceding `days`."""
    registered = now - timedelta(days=days + rng.randint(0, 365))
    transactions = [
        Transaction(
            amount=Decimal(rng.randint(100, 90_000)) / 100,
            payment_type=rng.choice(list(PaymentType)),
            transaction_date=now - timedelta(days=rng.randint(0, days), minutes=rng.randint(0, 24 * 60)),
        )
        for _ in range(rng.randint(0, max_transactions))
    ]
    contact_info = f"{rng.randint(100, 999)}-{rng.randint(100, 999)}-{rng.randint(1000, 9999)}"
    return Seller(name=name, contact_info=contact_info, registration_date=registered, transactions=transactions)


def build_demo_sellers(count: int, *, seed: int, now: datetime, days: int, max_transactions: int) -> list[Seller]:
    """Same `seed` and `now` always give the same sellers."""
    rng = Random(seed)
    return [
        build_demo_seller(
            rng, SELLER_NAMES[index % len(SELLER_NAMES)], now=now, days=days, max_transactions=max_transactions
        )
        for index in range(count)
    ]
