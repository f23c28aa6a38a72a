from __future__ import annotations

import argparse
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Sequence

from config import config
from db.db import init_db
from db.repositories import SellerRepository
from domain.base_types import SellerId
from domain.period import Period, parse_period, period_start
from domain.sales import DateWindow
from services.clock import fixed_clock, utc_now
from services.errors import InvalidDateWindowError, SellerNotFoundError
from services.seller_service import SellerService
from utils.sales_summary import compute_seller_totals, render_best_period, render_seller_totals

logger = logging.getLogger(__name__)


def build_seller_service(*, as_of: datetime | None = None) -> SellerService:
    settings = config()
    logger.info("Opening database at %s", settings.db_file)
    session = init_db(echo=settings.sql_echo, db_file=settings.db_file)
    clock = fixed_clock(as_of) if as_of is not None else utc_now
    return SellerService(SellerRepository(session), clock=clock)


def run_under_threshold(service: SellerService, threshold: Decimal, date_from: date, date_to: date) -> None:
    try:
        sellers = service.sellers_under_threshold(threshold, date_from, date_to)
    except InvalidDateWindowError as exc:
        print(f"Invalid date range: {exc}")
        return

    rows = compute_seller_totals(sellers, DateWindow.for_dates(date_from, date_to))
    render_seller_totals(f"Sellers below {threshold} between {date_from} and {date_to}:", rows)


def run_most_productive(service: SellerService, period: Period, now: datetime) -> None:
    try:
        seller = service.most_productive(period)
    except SellerNotFoundError:
        print(f"No sales during period {period}")
        return

    window = DateWindow(start=period_start(period, now), end=now)
    render_seller_totals(f"Most productive seller for {period}:", compute_seller_totals([seller], window))


def run_best_period(service: SellerService, seller_id: SellerId) -> None:
    try:
        seller = service.get_seller(seller_id)
    except SellerNotFoundError as exc:
        print(exc)
        return

    render_best_period(seller, service.best_period(seller_id))


def _parse_as_of(value: str) -> datetime:
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Sales analytics over the configured sellers database.")
    parser.add_argument("--as-of", type=_parse_as_of, default=None, help="Pretend the current time is this ISO timestamp")
    subparsers = parser.add_subparsers(dest="command", required=True)

    under = subparsers.add_parser("under-threshold", help="Sellers whose total in a date range is below a sum")
    under.add_argument("--sum", dest="threshold", type=Decimal, required=True)
    under.add_argument("--date-from", type=date.fromisoformat, required=True)
    under.add_argument("--date-to", type=date.fromisoformat, required=True)

    productive = subparsers.add_parser("most-productive", help="Seller with the highest total in a period")
    productive.add_argument("--period", type=parse_period, required=True, help="day, month, quarter or year")

    best = subparsers.add_parser("best-period", help="Densest run of sales dates for a seller")
    best.add_argument("--seller-id", type=int, required=True)

    args = parser.parse_args(argv)
    service = build_seller_service(as_of=args.as_of)

    if args.command == "under-threshold":
        run_under_threshold(service, args.threshold, args.date_from, args.date_to)
    elif args.command == "most-productive":
        run_most_productive(service, args.period, args.as_of or utc_now())
    elif args.command == "best-period":
        run_best_period(service, SellerId(args.seller_id))


if __name__ == "__main__":
    logging.basicConfig(level=config().log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    main()
