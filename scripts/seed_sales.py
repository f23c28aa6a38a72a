# flake8: noqa E402
# Run via: uv run scripts/seed_sales.py --sellers 5 --days 120 --as-of 2024-10-20T12:00:00
from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from config import config
from db.db import init_db
from db.repositories import SellerRepository
from utils.demo_sellers import build_demo_sellers

logger = logging.getLogger(__name__)


def run(
    *, sellers: int, days: int, max_transactions: int, seed: int, reset: bool, as_of: datetime | None = None
) -> None:
    settings = config()
    session = init_db(echo=settings.sql_echo, db_file=settings.db_file, reset=reset)
    repository = SellerRepository(session)

    now = as_of or datetime.now(timezone.utc)
    for seller in build_demo_sellers(sellers, seed=seed, now=now, days=days, max_transactions=max_transactions):
        created = repository.create(seller)
        logger.info("Seeded seller id=%s with %d transactions", created.id, len(created.transactions))

    print(f"Seeded {sellers} sellers into {settings.db_file}")


def _parse_as_of(value: str) -> datetime:
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def main() -> None:
    parser = argparse.ArgumentParser(description="Fill the sales database with random demo data.")
    parser.add_argument("--sellers", type=int, default=5)
    parser.add_argument("--days", type=int, default=120, help="Spread transactions over this many past days.")
    parser.add_argument("--max-transactions", type=int, default=25)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument(
        "--as-of", type=_parse_as_of, default=None, help="Anchor timestamps here; with --seed the data is reproducible."
    )
    parser.add_argument("--reset", action="store_true", help="Delete the database file first.")
    args = parser.parse_args()
    run(
        sellers=args.sellers,
        days=args.days,
        max_transactions=args.max_transactions,
        seed=args.seed,
        reset=args.reset,
        as_of=args.as_of,
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    main()
