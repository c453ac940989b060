"""Pydantic v2 schemas for transaction and dashboard endpoints."""
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, field_validator

_TRANSACTION_TYPES = ("income", "expense")


def _check_type(v: str | None) -> str | None:
    if v is not None and v not in _TRANSACTION_TYPES:
        raise ValueError("transaction_type must be income or expense")
    return v


def _check_amount(v: Decimal | None) -> Decimal | None:
    if v is not None and v <= 0:
        raise ValueError("amount must be positive")
    return v


# ── Categories ────────────────────────────────────────────────────────────────

class CategoryResponse(BaseModel):
    name: str
    category_type: str

    model_config = {"from_attributes": True}


# ── Transactions ──────────────────────────────────────────────────────────────

class TransactionCreate(BaseModel):
    transaction_type: str
    amount: Decimal
    category: str
    description: str = ""
    transaction_date: date
    created_by: str = "web"

    @field_validator("transaction_type")
    @classmethod
    def valid_type(cls, v: str) -> str:
        return _check_type(v)

    @field_validator("amount")
    @classmethod
    def positive_amount(cls, v: Decimal) -> Decimal:
        return _check_amount(v)


class TransactionUpdate(BaseModel):
    transaction_type: str | None = None
    amount: Decimal | None = None
    category: str | None = None
    description: str | None = None
    transaction_date: date | None = None

    @field_validator("transaction_type")
    @classmethod
    def valid_type(cls, v: str | None) -> str | None:
        return _check_type(v)

    @field_validator("amount")
    @classmethod
    def positive_amount(cls, v: Decimal | None) -> Decimal | None:
        return _check_amount(v)


class TransactionResponse(BaseModel):
    id: UUID
    transaction_type: str
    amount: Decimal
    category: str
    description: str
    transaction_date: date
    created_by: str
    slip_url: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TransactionListResponse(BaseModel):
    items: list[TransactionResponse]
    total: int
    limit: int
    offset: int


# ── Dashboard ─────────────────────────────────────────────────────────────────

class SummaryResponse(BaseModel):
    current_month_income: Decimal
    current_month_expense: Decimal
    net_profit: Decimal
    total_transactions: int

    model_config = {"from_attributes": True}


class MonthlyTotalsResponse(BaseModel):
    month: str
    year: int
    income: Decimal
    expense: Decimal

    model_config = {"from_attributes": True}


class CategoryTotalResponse(BaseModel):
    name: str
    value: Decimal
    color: str

    model_config = {"from_attributes": True}
