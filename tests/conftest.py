from typing import Generator

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from db.models import Base
from db.repositories import SellerRepository, TransactionRepository
from services.clock import fixed_clock
from services.seller_service import SellerService
from services.transaction_service import TransactionService
from tests.constants import NOW

engine: Engine = create_engine(
    "sqlite:///:memory:", connect_args={"check_same_thread": False}, poolclass=StaticPool
)
session_factory = sessionmaker(engine)


@pytest.fixture(scope="function")
def test_session() -> Generator[Session, None, None]:
    with session_factory() as session:
        yield session


@pytest.fixture(scope="function", autouse=True)
def reset_db() -> Generator[None, None, None]:
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def seller_repository(test_session: Session) -> SellerRepository:
    return SellerRepository(test_session)


@pytest.fixture(scope="function")
def transaction_repository(test_session: Session) -> TransactionRepository:
    return TransactionRepository(test_session)


@pytest.fixture(scope="function")
def seller_service(seller_repository: SellerRepository) -> SellerService:
    return SellerService(seller_repository, clock=fixed_clock(NOW))


@pytest.fixture(scope="function")
def transaction_service(
    transaction_repository: TransactionRepository, seller_repository: SellerRepository
) -> TransactionService:
    return TransactionService(transaction_repository, seller_repository, clock=fixed_clock(NOW))
