"""Finance use-case queries: listings and dashboard aggregations."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from quarion.domain.finance.entities import DEFAULT_CATEGORIES, Category, Transaction, TransactionType
from quarion.domain.finance.repositories import ITransactionRepository

THAI_MONTH_LABELS = (
    "ม.ค.", "ก.พ.", "มี.ค.", "เม.ย.", "พ.ค.", "มิ.ย.",
    "ก.ค.", "ส.ค.", "ก.ย.", "ต.ค.", "พ.ย.", "ธ.ค.",
)

CATEGORY_COLORS = (
    "#ef4444", "#f97316", "#eab308", "#22c55e",
    "#3b82f6", "#8b5cf6", "#ec4899", "#06b6d4",
)

_TOP_CATEGORIES = 6


# ── Result structures ────────────────────────────────────────────────────────

@dataclass
class Summary:
    current_month_income: Decimal
    current_month_expense: Decimal
    net_profit: Decimal
    total_transactions: int


@dataclass
class MonthlyTotals:
    month: str          # Thai abbreviated month label
    year: int
    income: Decimal
    expense: Decimal


@dataclass
class CategoryTotal:
    name: str
    value: Decimal
    color: str


# ── Queries ──────────────────────────────────────────────────────────────────

async def list_transactions_with_count(
    *,
    date_from: date | None = None,
    date_to: date | None = None,
    transaction_type: str | None = None,
    limit: int = 50,
    offset: int = 0,
    repo: ITransactionRepository,
) -> tuple[list[Transaction], int]:
    filters = dict(date_from=date_from, date_to=date_to, transaction_type=transaction_type)
    items = await repo.find(limit=limit, offset=offset, **filters)
    total = await repo.count(**filters)
    return items, total


def list_categories(category_type: str | None = None) -> list[Category]:
    if category_type is None:
        return list(DEFAULT_CATEGORIES)
    return [c for c in DEFAULT_CATEGORIES if c.category_type == category_type]


def _month_start(year: int, month: int) -> date:
    return date(year, month, 1)


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def _totals(transactions: list[Transaction]) -> tuple[Decimal, Decimal]:
    income = sum(
        (t.amount for t in transactions if t.transaction_type == TransactionType.INCOME),
        Decimal("0"),
    )
    expense = sum(
        (t.amount for t in transactions if t.transaction_type == TransactionType.EXPENSE),
        Decimal("0"),
    )
    return income, expense


async def get_summary(*, today: date, repo: ITransactionRepository) -> Summary:
    """Income/expense of the month containing ``today`` and the all-time count."""
    next_year, next_month = _shift_month(today.year, today.month, 1)
    month_end = _month_start(next_year, next_month) - timedelta(days=1)
    current = await repo.find(
        date_from=_month_start(today.year, today.month), date_to=month_end, limit=None,
    )
    income, expense = _totals(current)
    return Summary(
        current_month_income=income,
        current_month_expense=expense,
        net_profit=income - expense,
        total_transactions=await repo.count(),
    )


async def get_monthly_data(
    *, today: date, months: int = 6, repo: ITransactionRepository,
) -> list[MonthlyTotals]:
    """Income/expense per calendar month for the last ``months`` months, oldest first."""
    first_year, first_month = _shift_month(today.year, today.month, -(months - 1))
    transactions = await repo.find(date_from=_month_start(first_year, first_month), limit=None)

    buckets: dict[tuple[int, int], list[Transaction]] = {}
    for tx in transactions:
        key = (tx.transaction_date.year, tx.transaction_date.month)
        buckets.setdefault(key, []).append(tx)

    result = []
    for offset in range(months):
        year, month = _shift_month(first_year, first_month, offset)
        income, expense = _totals(buckets.get((year, month), []))
        result.append(MonthlyTotals(
            month=THAI_MONTH_LABELS[month - 1], year=year, income=income, expense=expense,
        ))
    return result


async def get_category_breakdown(*, repo: ITransactionRepository) -> list[CategoryTotal]:
    """Expense totals per category, largest first, top six.

    Colours follow the order in which categories are first seen.
    """
    expenses = await repo.find(transaction_type=TransactionType.EXPENSE, limit=None)

    totals: dict[str, Decimal] = {}
    for tx in expenses:
        totals[tx.category] = totals.get(tx.category, Decimal("0")) + tx.amount

    breakdown = [
        CategoryTotal(name=name, value=value, color=CATEGORY_COLORS[i % len(CATEGORY_COLORS)])
        for i, (name, value) in enumerate(totals.items())
    ]
    breakdown.sort(key=lambda c: c.value, reverse=True)
    return breakdown[:_TOP_CATEGORIES]
