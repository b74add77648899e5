import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .config import configure_logging, get_settings
from .models import (
    LedgerStatus, OutputFormat, User, CreateGroupRequest, CreateUserRequest,
    CreateTransactionRequest, UserBalance, TransactionResponse, GroupSnapshot,
    NameListResponse, TransactionListResponse, MessageResponse,
)
from .report import format_balance, name_lines, transaction_lines, to_text
from .service import LedgerService, LedgerServiceError

logger = logging.getLogger("splitledger.api")
settings = get_settings()

_HTTP_STATUS = {
    LedgerStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    LedgerStatus.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    LedgerStatus.EMPTY_GROUP: status.HTTP_409_CONFLICT,
    LedgerStatus.INVALID_AMOUNT: status.HTTP_422_UNPROCESSABLE_ENTITY,
}

app = FastAPI(
    title="Split Ledger API",
    description="In-memory ledger for shared-expense groups, users kept in ascending-balance order",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ledger_service = LedgerService()


def _http_error(e: LedgerServiceError) -> HTTPException:
    logger.warning("%s: %s", e.status.value, e)
    return HTTPException(
        status_code=_HTTP_STATUS.get(e.status, status.HTTP_400_BAD_REQUEST),
        detail={"status": e.status.value, "message": str(e)},
    )


def _text(lines: list[str]) -> PlainTextResponse:
    return PlainTextResponse(to_text(lines))


@app.get("/health", tags=["System"])
async def health_check():
    return {"status": "healthy", "service": "splitledger"}


@app.post("/groups", response_model=GroupSnapshot, status_code=status.HTTP_201_CREATED, tags=["Groups"])
async def create_group(request: CreateGroupRequest) -> GroupSnapshot:
    try:
        ledger_service.add_group(request.name)
        return ledger_service.group_snapshot(request.name)
    except LedgerServiceError as e:
        raise _http_error(e)


@app.get("/groups", response_model=NameListResponse, tags=["Groups"])
async def list_groups(output: OutputFormat = Query(OutputFormat.JSON, alias="format")):
    names = ledger_service.list_groups()
    if output == OutputFormat.TEXT:
        return _text(name_lines(names))
    return NameListResponse(names=names)


@app.get("/groups/{group_name}", response_model=GroupSnapshot, tags=["Groups"])
async def get_group(group_name: str) -> GroupSnapshot:
    try:
        return ledger_service.group_snapshot(group_name)
    except LedgerServiceError as e:
        raise _http_error(e)


@app.post("/groups/{group_name}/users", response_model=User, status_code=status.HTTP_201_CREATED, tags=["Users"])
async def add_user(group_name: str, request: CreateUserRequest) -> User:
    try:
        return ledger_service.add_user(group_name, request.name)
    except LedgerServiceError as e:
        raise _http_error(e)


@app.get("/groups/{group_name}/users", response_model=NameListResponse, tags=["Users"])
async def list_users(group_name: str, output: OutputFormat = Query(OutputFormat.JSON, alias="format")):
    try:
        names = ledger_service.list_users(group_name)
    except LedgerServiceError as e:
        raise _http_error(e)
    if output == OutputFormat.TEXT:
        return _text(name_lines(names))
    return NameListResponse(names=names)


@app.delete("/groups/{group_name}/users/{user_name}", response_model=MessageResponse, tags=["Users"])
async def remove_user(group_name: str, user_name: str) -> MessageResponse:
    try:
        ledger_service.remove_user(group_name, user_name)
    except LedgerServiceError as e:
        raise _http_error(e)
    return MessageResponse(message=f"User {user_name} removed from group {group_name}")


@app.get("/groups/{group_name}/users/{user_name}/balance", response_model=UserBalance, tags=["Users"])
async def get_user_balance(
    group_name: str,
    user_name: str,
    output: OutputFormat = Query(OutputFormat.JSON, alias="format"),
):
    try:
        balance = ledger_service.user_balance(group_name, user_name)
    except LedgerServiceError as e:
        raise _http_error(e)
    if output == OutputFormat.TEXT:
        return _text([format_balance(balance.balance, settings.ledger.currency_symbol)])
    return balance


@app.get("/groups/{group_name}/under-paid", response_model=NameListResponse, tags=["Users"])
async def under_paid(group_name: str, output: OutputFormat = Query(OutputFormat.JSON, alias="format")):
    try:
        names = ledger_service.under_paid(group_name)
    except LedgerServiceError as e:
        raise _http_error(e)
    if output == OutputFormat.TEXT:
        return _text(names)
    return NameListResponse(names=names)


@app.post(
    "/groups/{group_name}/transactions",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Transactions"],
)
async def add_transaction(group_name: str, request: CreateTransactionRequest) -> TransactionResponse:
    try:
        return ledger_service.add_transaction(group_name, request.user_name, request.amount)
    except LedgerServiceError as e:
        raise _http_error(e)


@app.get("/groups/{group_name}/transactions", response_model=TransactionListResponse, tags=["Transactions"])
async def recent_transactions(
    group_name: str,
    count: Optional[int] = None,
    output: OutputFormat = Query(OutputFormat.JSON, alias="format"),
):
    if count is None:
        count = settings.ledger.recent_limit
    try:
        transactions = ledger_service.recent_transactions(group_name, count)
    except LedgerServiceError as e:
        raise _http_error(e)
    if output == OutputFormat.TEXT:
        return _text(transaction_lines(transactions))
    return TransactionListResponse(group=group_name, transactions=transactions)


if __name__ == "__main__":
    import uvicorn
    configure_logging(settings)
    uvicorn.run(app, host=settings.server.host, port=settings.server.port)
