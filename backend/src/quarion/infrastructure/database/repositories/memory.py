"""Process-local transaction store, used when no database is configured."""
from __future__ import annotations

from dataclasses import replace
from datetime import date
from uuid import UUID

from quarion.domain.finance.entities import Transaction


class InMemoryTransactionRepository:
    """Same interface as the SQL repository; data lives for the process lifetime."""

    def __init__(self) -> None:
        self._items: dict[UUID, Transaction] = {}

    def _matching(
        self,
        date_from: date | None,
        date_to: date | None,
        transaction_type: str | None,
    ) -> list[Transaction]:
        items = list(self._items.values())
        if date_from:
            items = [t for t in items if t.transaction_date >= date_from]
        if date_to:
            items = [t for t in items if t.transaction_date <= date_to]
        if transaction_type:
            items = [t for t in items if t.transaction_type == transaction_type]
        return items

    async def get_by_id(self, transaction_id: UUID) -> Transaction | None:
        tx = self._items.get(transaction_id)
        return replace(tx) if tx else None

    async def find(
        self,
        *,
        date_from: date | None = None,
        date_to: date | None = None,
        transaction_type: str | None = None,
        limit: int | None = 50,
        offset: int = 0,
    ) -> list[Transaction]:
        items = sorted(
            self._matching(date_from, date_to, transaction_type),
            key=lambda t: (t.transaction_date, t.created_at),
            reverse=True,
        )
        end = None if limit is None else offset + limit
        return [replace(t) for t in items[offset:end]]

    async def count(
        self,
        *,
        date_from: date | None = None,
        date_to: date | None = None,
        transaction_type: str | None = None,
    ) -> int:
        return len(self._matching(date_from, date_to, transaction_type))

    async def save(self, transaction: Transaction) -> Transaction:
        self._items[transaction.id] = replace(transaction)
        return transaction

    async def delete(self, transaction_id: UUID) -> None:
        self._items.pop(transaction_id, None)
