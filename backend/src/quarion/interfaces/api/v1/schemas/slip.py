"""Pydantic v2 schemas for slip endpoints."""
from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from .finance import TransactionResponse


class SlipDataResponse(BaseModel):
    amount: Decimal | None
    date: str | None
    time: str | None
    bank_name: str | None
    ref_number: str | None
    raw_text: str

    model_config = {"from_attributes": True}


class TransactionDraftResponse(BaseModel):
    transaction_type: str
    amount: Decimal | None
    transaction_date: date
    category: str
    description: str

    model_config = {"from_attributes": True}


class SlipScanResponse(BaseModel):
    slip: SlipDataResponse
    draft: TransactionDraftResponse
    needs_review: bool
    file_hash: str


class QuickSlipResponse(BaseModel):
    transaction: TransactionResponse
    slip: SlipDataResponse
