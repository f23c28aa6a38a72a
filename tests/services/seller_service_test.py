from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from db.repositories import SellerRepository
from domain.analytics import BestPeriod
from domain.base_types import SellerId
from domain.period import Period
from domain.sales import Seller
from services.clock import fixed_clock
from services.errors import InvalidDateWindowError, SellerNotFoundError
from services.seller_service import SellerService
from tests.constants import NOW
from tests.helpers.sales import at, make_transaction


@pytest.fixture()
def stored_sellers(seller_repository: SellerRepository) -> list[Seller]:
    sellers = [
        Seller(
            name="Alberto Mayert",
            contact_info="878-999-0161",
            registration_date=datetime(2022, 10, 22, 14, 30, tzinfo=timezone.utc),
            transactions=[
                make_transaction("500.12", at(date(2024, 9, 11), 14, 30)),
                make_transaction("100.50", at(date(2024, 9, 11), 15, 0)),
                make_transaction("325.51", at(date(2024, 9, 11), 14, 45)),
            ],
        ),
        Seller(
            name="Elmer Runte",
            contact_info="645-423-7550",
            registration_date=datetime(2024, 9, 3, 9, 45, tzinfo=timezone.utc),
            transactions=[
                make_transaction("12.53", at(date(2024, 10, 2))),
                make_transaction("52.78", at(date(2024, 10, 5))),
            ],
        ),
        Seller(
            name="Christina Zieme",
            contact_info="921-270-2943",
            registration_date=datetime(2024, 10, 19, 12, 0, tzinfo=timezone.utc),
            transactions=[make_transaction("5.61", at(date(2024, 10, 19), 16, 0))],
        ),
    ]
    return [seller_repository.create(seller) for seller in sellers]


def test_create_seller_stamps_registration_date(seller_service: SellerService) -> None:
    seller = seller_service.create_seller("Alexander M.", "821-123-12")

    assert seller.id is not None
    assert seller.registration_date == NOW
    assert seller_service.list_sellers() == [seller]


def test_get_seller_includes_transactions(seller_service: SellerService, stored_sellers: list[Seller]) -> None:
    seller_id = stored_sellers[0].id
    assert seller_id is not None

    seller = seller_service.get_seller(seller_id)

    assert len(seller.transactions) == 3


def test_missing_seller_raises_not_found(seller_service: SellerService) -> None:
    missing = SellerId(7)

    with pytest.raises(SellerNotFoundError, match="Seller with id '7' not found") as exc_info:
        seller_service.get_seller(missing)
    assert exc_info.value.seller_id == missing

    with pytest.raises(SellerNotFoundError):
        seller_service.update_seller(missing, name="Nobody")
    with pytest.raises(SellerNotFoundError):
        seller_service.delete_seller(missing)
    with pytest.raises(SellerNotFoundError):
        seller_service.best_period(missing)


def test_update_and_delete_seller(seller_service: SellerService, stored_sellers: list[Seller]) -> None:
    seller_id = stored_sellers[1].id
    assert seller_id is not None

    updated = seller_service.update_seller(seller_id, contact_info="125-122-122")
    assert updated.name == "Elmer Runte"
    assert updated.contact_info == "125-122-122"

    seller_service.delete_seller(seller_id)
    assert [seller.name for seller in seller_service.list_sellers()] == ["Alberto Mayert", "Christina Zieme"]


@pytest.mark.parametrize(
    ("threshold", "expected"),
    [
        ("10000", ["Alberto Mayert", "Elmer Runte", "Christina Zieme"]),
        ("58.12", ["Christina Zieme"]),
        ("65.32", ["Elmer Runte", "Christina Zieme"]),
        ("5.61", []),
    ],
)
def test_sellers_under_threshold(
    seller_service: SellerService, stored_sellers: list[Seller], threshold: str, expected: list[str]
) -> None:
    result = seller_service.sellers_under_threshold(Decimal(threshold), date(2024, 9, 10), date(2024, 10, 20))

    assert [seller.name for seller in result] == expected


def test_sellers_under_threshold_includes_last_day(seller_service: SellerService, stored_sellers: list[Seller]) -> None:
    # Christina's only sale happens in the afternoon of the last day of the range.
    result = seller_service.sellers_under_threshold(Decimal("5.62"), date(2024, 10, 19), date(2024, 10, 19))

    assert [seller.name for seller in result] == ["Alberto Mayert", "Elmer Runte", "Christina Zieme"]
    result = seller_service.sellers_under_threshold(Decimal("5.61"), date(2024, 10, 19), date(2024, 10, 19))
    assert [seller.name for seller in result] == ["Alberto Mayert", "Elmer Runte"]


def test_sellers_under_threshold_rejects_inverted_range(seller_service: SellerService) -> None:
    with pytest.raises(InvalidDateWindowError):
        seller_service.sellers_under_threshold(Decimal("1"), date(2024, 10, 20), date(2024, 9, 10))


@pytest.mark.parametrize(
    ("period", "expected"),
    [
        (Period.YEAR, "Alberto Mayert"),
        (Period.QUARTER, "Elmer Runte"),
        (Period.MONTH, "Elmer Runte"),
        (Period.DAY, "Christina Zieme"),
    ],
)
def test_most_productive(
    seller_service: SellerService, stored_sellers: list[Seller], period: Period, expected: str
) -> None:
    assert seller_service.most_productive(period).name == expected


def test_most_productive_without_sales_raises_not_found(
    seller_repository: SellerRepository, stored_sellers: list[Seller]
) -> None:
    service = SellerService(seller_repository, clock=fixed_clock(NOW - timedelta(days=3 * 365)))

    with pytest.raises(SellerNotFoundError, match="with period 'DAY'") as exc_info:
        service.most_productive(Period.DAY)
    assert exc_info.value.period == Period.DAY


def test_best_period(seller_service: SellerService, stored_sellers: list[Seller]) -> None:
    alberto, elmer, _ = stored_sellers
    assert alberto.id is not None and elmer.id is not None

    assert seller_service.best_period(alberto.id) == BestPeriod(
        start=date(2024, 9, 11), end=date(2024, 9, 11), count=3
    )
    # Two sales three days apart score 4/4 and do not beat a single day (1/1).
    assert seller_service.best_period(elmer.id) == BestPeriod(start=date(2024, 10, 5), end=date(2024, 10, 5), count=1)


def test_best_period_for_seller_without_transactions(seller_service: SellerService) -> None:
    seller = seller_service.create_seller("Quiet Seller")
    assert seller.id is not None

    assert seller_service.best_period(seller.id) == BestPeriod()
