"""QuarionFacade: the single entry point to the application layer.

All routers go through this facade instead of calling application functions directly.
This keeps the API layer thin and lets tests swap the repository and OCR engine.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from pathlib import Path
from uuid import UUID

from starlette.concurrency import run_in_threadpool

from quarion.application.finance import commands as fin_commands
from quarion.application.finance import queries as fin_queries
from quarion.application.slip import commands as slip_commands
from quarion.domain.finance.entities import Category, Transaction
from quarion.domain.finance.repositories import ITransactionRepository


class QuarionFacade:
    """Aggregates all application use cases. Injected via FastAPI dependency."""

    def __init__(
        self,
        transaction_repo: ITransactionRepository,
        recognizer: slip_commands.Recognizer,
        storage_path: Path,
        max_upload_bytes: int,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._recognizer = recognizer
        self._storage_path = storage_path
        self._max_upload_bytes = max_upload_bytes

    # ── Slips ─────────────────────────────────────────────────────────────────

    async def scan_slip(
        self, file_bytes: bytes, content_type: str | None, today: date | None = None,
    ) -> slip_commands.SlipScan:
        slip_commands.validate_upload(file_bytes, content_type, self._max_upload_bytes)
        return await run_in_threadpool(
            slip_commands.scan_slip, file_bytes, recognizer=self._recognizer, today=today,
        )

    async def quick_slip(
        self,
        file_bytes: bytes,
        content_type: str | None,
        filename: str | None,
        created_by: str,
    ) -> slip_commands.QuickSlipResult:
        slip_commands.validate_upload(file_bytes, content_type, self._max_upload_bytes)
        return await slip_commands.quick_slip(
            file_bytes=file_bytes,
            filename=filename,
            created_by=created_by,
            recognizer=self._recognizer,
            repo=self._transaction_repo,
            storage_path=self._storage_path,
        )

    # ── Transactions ──────────────────────────────────────────────────────────

    async def list_transactions_with_count(self, **kwargs) -> tuple[list[Transaction], int]:
        return await fin_queries.list_transactions_with_count(repo=self._transaction_repo, **kwargs)

    async def get_transaction(self, transaction_id: UUID) -> Transaction | None:
        return await self._transaction_repo.get_by_id(transaction_id)

    async def create_transaction(
        self,
        *,
        transaction_type: str,
        amount: Decimal,
        category: str,
        description: str,
        transaction_date: date,
        created_by: str,
    ) -> Transaction:
        return await fin_commands.create_transaction(
            transaction_type=transaction_type,
            amount=amount,
            category=category,
            description=description,
            transaction_date=transaction_date,
            created_by=created_by,
            repo=self._transaction_repo,
        )

    async def update_transaction(self, transaction_id: UUID, **kwargs) -> Transaction:
        return await fin_commands.update_transaction(
            transaction_id=transaction_id, repo=self._transaction_repo, **kwargs,
        )

    async def delete_transaction(self, transaction_id: UUID) -> None:
        await fin_commands.delete_transaction(transaction_id=transaction_id, repo=self._transaction_repo)

    # ── Dashboard ─────────────────────────────────────────────────────────────

    async def get_summary(self, today: date) -> fin_queries.Summary:
        return await fin_queries.get_summary(today=today, repo=self._transaction_repo)

    async def get_monthly_data(self, today: date, months: int = 6) -> list[fin_queries.MonthlyTotals]:
        return await fin_queries.get_monthly_data(today=today, months=months, repo=self._transaction_repo)

    async def get_category_breakdown(self) -> list[fin_queries.CategoryTotal]:
        return await fin_queries.get_category_breakdown(repo=self._transaction_repo)

    def list_categories(self, category_type: str | None = None) -> list[Category]:
        return fin_queries.list_categories(category_type)
