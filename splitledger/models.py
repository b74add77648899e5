from enum import Enum

from pydantic import BaseModel, Field, ConfigDict


class LedgerStatus(str, Enum):
    OK = "OK"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    EMPTY_GROUP = "EMPTY_GROUP"
    INVALID_AMOUNT = "INVALID_AMOUNT"


class OutputFormat(str, Enum):
    JSON = "json"
    TEXT = "text"


class User(BaseModel):
    name: str
    balance: float = 0.0


class Transaction(BaseModel):
    user_name: str
    amount: float = Field(..., allow_inf_nan=False)

    model_config = ConfigDict(frozen=True)


class CreateGroupRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Unique group name")

    model_config = ConfigDict(json_schema_extra={"example": {"name": "flat-42"}})


class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, description="User name, unique within the group")

    model_config = ConfigDict(json_schema_extra={"example": {"name": "alice"}})


class CreateTransactionRequest(BaseModel):
    user_name: str = Field(..., min_length=1)
    amount: float = Field(..., allow_inf_nan=False, description="Signed balance delta")

    model_config = ConfigDict(json_schema_extra={
        "example": {"user_name": "alice", "amount": 12.50}
    })


class UserBalance(BaseModel):
    group: str
    user_name: str
    balance: float
    total_transactions: int


class TransactionResponse(BaseModel):
    group: str
    transaction: Transaction
    balance_after: float
    position: int
    message: str


class GroupSnapshot(BaseModel):
    name: str
    users: list[User]
    transactions: list[Transaction]
    total_transactions: int


class NameListResponse(BaseModel):
    names: list[str]


class TransactionListResponse(BaseModel):
    group: str
    transactions: list[Transaction]


class MessageResponse(BaseModel):
    message: str
