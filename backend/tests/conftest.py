from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from quarion.domain.finance.entities import Transaction, TransactionType
from quarion.infrastructure.database.repositories.memory import InMemoryTransactionRepository

KBANK_SLIP_TEXT = (
    "โอนเงินผ่านกสิกร จำนวน 1,500.50 บาท วันที่ 15/03/68 "
    "เวลา 14:30 น. Ref: ABC1234567890"
)

# Smallest valid PNG signature + header; the fake recognizer never decodes it.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class FakeRecognizer:
    """Stands in for EasyOCR: returns canned text and records calls."""

    def __init__(self, text: str = KBANK_SLIP_TEXT, error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[bytes] = []

    def __call__(self, image_bytes: bytes) -> str:
        self.calls.append(image_bytes)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def recognizer() -> FakeRecognizer:
    return FakeRecognizer()


@pytest.fixture
def memory_repo() -> InMemoryTransactionRepository:
    return InMemoryTransactionRepository()


def make_tx(
    transaction_type: str,
    amount: str,
    transaction_date: date,
    category: str = "ค่าใช้จ่ายอื่นๆ",
) -> Transaction:
    return Transaction(
        id=uuid4(),
        transaction_type=TransactionType(transaction_type),
        amount=Decimal(amount),
        category=category,
        description="",
        transaction_date=transaction_date,
        created_by="tester",
    )
