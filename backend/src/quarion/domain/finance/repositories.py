"""Repository interfaces for the Finance bounded context."""
from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from .entities import Transaction


class ITransactionRepository(Protocol):
    async def get_by_id(self, transaction_id: UUID) -> Transaction | None: ...

    async def find(
        self,
        *,
        date_from: date | None = None,
        date_to: date | None = None,
        transaction_type: str | None = None,
        limit: int | None = 50,
        offset: int = 0,
    ) -> list[Transaction]: ...

    async def count(
        self,
        *,
        date_from: date | None = None,
        date_to: date | None = None,
        transaction_type: str | None = None,
    ) -> int: ...

    async def save(self, transaction: Transaction) -> Transaction: ...

    async def delete(self, transaction_id: UUID) -> None: ...
