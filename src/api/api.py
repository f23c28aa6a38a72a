import logging
from contextlib import asynccontextmanager
from datetime import date
from decimal import Decimal
from http import HTTPStatus
from time import perf_counter
from typing import Annotated, Any, AsyncGenerator, Awaitable, Callable

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.dependencies import get_seller_service, get_transaction_service
from api.payloads import NewSellerPayload, NewTransactionPayload, SellerView, TransactionView, UpdateSellerPayload
from config import config
from db.db import create_db_engine
from domain.analytics import BestPeriod
from domain.base_types import PaymentType, SellerId, TransactionId
from domain.period import parse_period
from services.errors import InvalidDateWindowError, SellerNotFoundError, TransactionNotFoundError
from services.seller_service import SellerService
from services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

PROBLEM_JSON = "application/problem+json"


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI) -> AsyncGenerator[None, None]:
    settings = config()
    engine = create_db_engine(settings.db_file, echo=settings.sql_echo)
    fastapi_app.state.sessionmaker = sessionmaker(engine)
    logger.info("Using database %s", settings.db_file)
    yield
    engine.dispose()


app = FastAPI(lifespan=lifespan)


@app.middleware("http")
async def log_process_time(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    start_time = perf_counter()
    response = await call_next(request)
    process_time = perf_counter() - start_time
    logger.info("Request time: %s %s -> %d in %.4fs", request.method, request.url, response.status_code, process_time)
    return response


def _problem(status_code: int, detail: str, **extra: Any) -> JSONResponse:
    content = {
        "type": "about:blank",
        "title": HTTPStatus(status_code).phrase,
        "status": status_code,
        "detail": detail,
        **extra,
    }
    return JSONResponse(status_code=status_code, content=content, media_type=PROBLEM_JSON)


@app.exception_handler(SellerNotFoundError)
async def handle_seller_not_found(request: Request, exc: SellerNotFoundError) -> JSONResponse:
    return _problem(HTTPStatus.NOT_FOUND, str(exc), error="Seller not found")


@app.exception_handler(TransactionNotFoundError)
async def handle_transaction_not_found(request: Request, exc: TransactionNotFoundError) -> JSONResponse:
    return _problem(HTTPStatus.NOT_FOUND, str(exc), error="Transaction not found")


@app.exception_handler(InvalidDateWindowError)
async def handle_invalid_window(request: Request, exc: InvalidDateWindowError) -> JSONResponse:
    return _problem(HTTPStatus.BAD_REQUEST, str(exc))


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = {str(error["loc"][-1]): error["msg"] for error in exc.errors() if error.get("loc")}
    return _problem(HTTPStatus.BAD_REQUEST, "Invalid request", errors=errors)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _problem(exc.status_code, str(exc.detail))


SellerServiceDep = Annotated[SellerService, Depends(get_seller_service)]
TransactionServiceDep = Annotated[TransactionService, Depends(get_transaction_service)]


@app.get("/seller")
def get_sellers(service: SellerServiceDep) -> list[SellerView]:
    return [SellerView.from_domain(seller) for seller in service.list_sellers()]


@app.get("/seller/less-than-sum")
def get_sellers_under_sum(
    service: SellerServiceDep,
    threshold: Annotated[Decimal, Query(alias="sum")],
    date_from: date,
    date_to: date,
) -> list[SellerView]:
    return [SellerView.from_domain(seller) for seller in service.sellers_under_threshold(threshold, date_from, date_to)]


@app.get("/seller/most-productive")
def get_most_productive_seller(service: SellerServiceDep, period: str) -> SellerView:
    try:
        parsed = parse_period(period)
    except ValueError as err:
        raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=f"Invalid period: {period}") from err
    return SellerView.from_domain(service.most_productive(parsed))


@app.get("/seller/{seller_id}", response_model_exclude_none=True)
def get_seller(seller_id: int, service: SellerServiceDep, transactions: bool = False) -> SellerView:
    return SellerView.from_domain(service.get_seller(SellerId(seller_id)), with_transactions=transactions)


@app.get("/seller/{seller_id}/best-period")
def get_best_period(seller_id: int, service: SellerServiceDep) -> BestPeriod:
    return service.best_period(SellerId(seller_id))


@app.post("/seller", status_code=HTTPStatus.CREATED)
def create_seller(payload: NewSellerPayload, service: SellerServiceDep) -> SellerView:
    return SellerView.from_domain(service.create_seller(payload.name, payload.contact_info))


@app.put("/seller/{seller_id}")
def update_seller(seller_id: int, payload: UpdateSellerPayload, service: SellerServiceDep) -> SellerView:
    seller = service.update_seller(SellerId(seller_id), name=payload.name, contact_info=payload.contact_info)
    return SellerView.from_domain(seller)


@app.delete("/seller/{seller_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_seller(seller_id: int, service: SellerServiceDep) -> None:
    service.delete_seller(SellerId(seller_id))


@app.get("/transaction")
def get_transactions(service: TransactionServiceDep) -> list[TransactionView]:
    return [TransactionView.from_domain(transaction) for transaction in service.list_transactions()]


@app.get("/transaction/{transaction_id}")
def get_transaction(transaction_id: int, service: TransactionServiceDep) -> TransactionView:
    return TransactionView.from_domain(service.get_transaction(TransactionId(transaction_id)))


@app.post("/transaction", status_code=HTTPStatus.CREATED)
def create_transaction(payload: NewTransactionPayload, service: TransactionServiceDep) -> TransactionView:
    try:
        payment_type = PaymentType(payload.payment_type.strip().upper())
    except ValueError as err:
        raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail="Invalid payment type") from err

    transaction = service.create_transaction(payload.seller_id, payload.amount, payment_type)
    return TransactionView.from_domain(transaction)
