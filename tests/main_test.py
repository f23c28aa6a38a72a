from datetime import date, datetime

import pytest

import main as cli
from db.repositories import SellerRepository
from domain.sales import Seller
from services.seller_service import SellerService
from tests.constants import NOW
from tests.helpers.sales import at, make_transaction


@pytest.fixture()
def stored_sellers(seller_repository: SellerRepository) -> list[Seller]:
    return [
        seller_repository.create(
            Seller(
                name="Elmer Runte",
                registration_date=NOW,
                transactions=[
                    make_transaction("12.53", at(date(2024, 10, 2))),
                    make_transaction("52.78", at(date(2024, 10, 5))),
                ],
            )
        ),
        seller_repository.create(
            Seller(
                name="Christina Zieme",
                registration_date=NOW,
                transactions=[make_transaction("5.61", at(date(2024, 10, 19), 16, 0))],
            )
        ),
    ]


@pytest.fixture()
def patched_service(monkeypatch: pytest.MonkeyPatch, seller_service: SellerService) -> list[datetime | None]:
    requested_as_of: list[datetime | None] = []

    def _build(*, as_of: datetime | None = None) -> SellerService:
        requested_as_of.append(as_of)
        return seller_service

    monkeypatch.setattr(cli, "build_seller_service", _build)
    return requested_as_of


def test_under_threshold_command(
    patched_service: list[datetime | None], stored_sellers: list[Seller], capsys: pytest.CaptureFixture[str]
) -> None:
    cli.main(["under-threshold", "--sum", "10", "--date-from", "2024-10-01", "--date-to", "2024-10-20"])

    out = capsys.readouterr().out
    assert "Sellers below 10 between 2024-10-01 and 2024-10-20:" in out
    assert "Christina Zieme" in out
    assert "Elmer Runte" not in out
    assert patched_service == [None]


def test_most_productive_command(
    patched_service: list[datetime | None], stored_sellers: list[Seller], capsys: pytest.CaptureFixture[str]
) -> None:
    cli.main(["--as-of", "2024-10-20T12:30:00", "most-productive", "--period", "month"])

    out = capsys.readouterr().out
    assert "Most productive seller for MONTH:" in out
    assert "65.31" in out
    assert patched_service == [NOW]


def test_most_productive_command_without_sales(
    patched_service: list[datetime | None], capsys: pytest.CaptureFixture[str]
) -> None:
    cli.main(["--as-of", "2024-10-20T12:30:00+00:00", "most-productive", "--period", "day"])

    assert capsys.readouterr().out == "No sales during period DAY\n"


def test_best_period_command(
    patched_service: list[datetime | None], stored_sellers: list[Seller], capsys: pytest.CaptureFixture[str]
) -> None:
    cli.main(["best-period", "--seller-id", str(stored_sellers[0].id)])

    assert capsys.readouterr().out.splitlines() == [
        "Best period for seller 1 (Elmer Runte):",
        "  2024-10-05 → 2024-10-05: 1 transactions",
    ]


def test_invalid_period_is_rejected(patched_service: list[datetime | None]) -> None:
    with pytest.raises(SystemExit):
        cli.main(["most-productive", "--period", "fortnight"])
    assert patched_service == []


def test_best_period_command_for_missing_seller(
    patched_service: list[datetime | None], capsys: pytest.CaptureFixture[str]
) -> None:
    cli.main(["best-period", "--seller-id", "42"])

    assert capsys.readouterr().out == "Seller with id '42' not found\n"


def test_under_threshold_command_with_inverted_dates(
    patched_service: list[datetime | None], capsys: pytest.CaptureFixture[str]
) -> None:
    cli.main(["under-threshold", "--sum", "1", "--date-from", "2024-10-20", "--date-to", "2024-10-01"])

    assert capsys.readouterr().out == (
        "Invalid date range: date_from=2024-10-20 must not be after date_to=2024-10-01\n"
    )
