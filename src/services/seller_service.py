from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from db.repositories import SellerRepository
from domain.analytics import BestPeriod, best_period, sellers_under_threshold, top_performer
from domain.base_types import SellerId
from domain.period import Period, period_start
from domain.sales import DateWindow, Seller

from .clock import Clock, utc_now
from .errors import InvalidDateWindowError, SellerNotFoundError

logger = logging.getLogger(__name__)


class SellerService:
    def __init__(self, sellers: SellerRepository, *, clock: Clock = utc_now) -> None:
        self._sellers = sellers
        self._clock = clock

    def list_sellers(self) -> list[Seller]:
        return self._sellers.list()

    def get_seller(self, seller_id: SellerId) -> Seller:
        seller = self._sellers.get(seller_id)
        if seller is None:
            raise SellerNotFoundError(seller_id=seller_id)
        return seller

    def create_seller(self, name: str, contact_info: str | None = None) -> Seller:
        seller = self._sellers.create(Seller(name=name, contact_info=contact_info, registration_date=self._clock()))
        logger.info("Created seller id=%s name=%s", seller.id, seller.name)
        return seller

    def update_seller(self, seller_id: SellerId, *, name: str | None = None, contact_info: str | None = None) -> Seller:
        seller = self._sellers.update(seller_id, name=name, contact_info=contact_info)
        if seller is None:
            raise SellerNotFoundError(seller_id=seller_id)
        logger.info("Updated seller id=%s", seller_id)
        return seller

    def delete_seller(self, seller_id: SellerId) -> None:
        if not self._sellers.delete(seller_id):
            raise SellerNotFoundError(seller_id=seller_id)
        logger.info("Deleted seller id=%s", seller_id)

    def sellers_under_threshold(self, threshold: Decimal, date_from: date, date_to: date) -> list[Seller]:
        """Sellers whose total between the two dates (whole days, inclusive) is below `threshold`."""
        if date_from > date_to:
            raise InvalidDateWindowError(date_from=date_from, date_to=date_to)

        window = DateWindow.for_dates(date_from, date_to)
        sellers = self._sellers.list_with_transactions()
        result = sellers_under_threshold(sellers, threshold, window)
        logger.debug(
            "Sellers under %s between %s and %s: %d of %d", threshold, date_from, date_to, len(result), len(sellers)
        )
        return result

    def most_productive(self, period: Period) -> Seller:
        now = self._clock()
        window = DateWindow(start=period_start(period, now), end=now)
        seller = top_performer(self._sellers.list_with_transactions(), window)
        if seller is None:
            raise SellerNotFoundError(period=period)
        logger.debug("Most productive seller for %s since %s: id=%s", period, window.start, seller.id)
        return seller

    def best_period(self, seller_id: SellerId) -> BestPeriod:
        seller = self.get_seller(seller_id)
        result = best_period(seller.transactions)
        logger.debug("Best period for seller id=%s: %s", seller_id, result)
        return result
