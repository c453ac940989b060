"""Domain entities for the Finance bounded context."""
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import StrEnum
from uuid import UUID


class TransactionType(StrEnum):
    INCOME = "income"
    EXPENSE = "expense"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Transaction:
    """A single income or expense entry, amounts in THB."""
    id: UUID
    transaction_type: TransactionType
    amount: Decimal
    category: str
    description: str
    transaction_date: date
    created_by: str
    slip_url: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise ValueError("Transaction amount must be positive")


@dataclass(frozen=True)
class Category:
    name: str
    category_type: TransactionType


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category("ขายสินค้า", TransactionType.INCOME),
    Category("บริการ", TransactionType.INCOME),
    Category("รายได้อื่นๆ", TransactionType.INCOME),
    Category("ค่าเช่า", TransactionType.EXPENSE),
    Category("ค่าน้ำค่าไฟ", TransactionType.EXPENSE),
    Category("เงินเดือน", TransactionType.EXPENSE),
    Category("อุปกรณ์สำนักงาน", TransactionType.EXPENSE),
    Category("การตลาด", TransactionType.EXPENSE),
    Category("ค่าใช้จ่ายอื่นๆ", TransactionType.EXPENSE),
)

DEFAULT_EXPENSE_CATEGORY = "ค่าใช้จ่ายอื่นๆ"
