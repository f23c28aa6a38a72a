from typing import Annotated, Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from db.repositories import SellerRepository, TransactionRepository
from services.clock import Clock, utc_now
from services.seller_service import SellerService
from services.transaction_service import TransactionService


def get_session(request: Request) -> Generator[Session, None, None]:
    with request.app.state.sessionmaker() as session:
        yield session


def get_clock() -> Clock:
    return utc_now


def get_seller_repository(session: Annotated[Session, Depends(get_session)]) -> SellerRepository:
    return SellerRepository(session)


def get_transaction_repository(session: Annotated[Session, Depends(get_session)]) -> TransactionRepository:
    return TransactionRepository(session)


def get_seller_service(
    sellers: Annotated[SellerRepository, Depends(get_seller_repository)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> SellerService:
    return SellerService(sellers, clock=clock)


def get_transaction_service(
    transactions: Annotated[TransactionRepository, Depends(get_transaction_repository)],
    sellers: Annotated[SellerRepository, Depends(get_seller_repository)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> TransactionService:
    return TransactionService(transactions, sellers, clock=clock)
