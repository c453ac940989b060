"""Concrete SQLAlchemy repository implementation for transactions."""
from datetime import date, datetime, timezone
from uuid import UUID

from sqlalchemy import func as sqlfunc, select
from sqlalchemy.ext.asyncio import AsyncSession

from quarion.domain.finance.entities import Transaction, TransactionType
from quarion.infrastructure.database.models.finance import TransactionModel


def _conditions(
    date_from: date | None,
    date_to: date | None,
    transaction_type: str | None,
) -> list:
    conditions = []
    if date_from:
        conditions.append(TransactionModel.transaction_date >= date_from)
    if date_to:
        conditions.append(TransactionModel.transaction_date <= date_to)
    if transaction_type:
        conditions.append(TransactionModel.transaction_type == str(transaction_type))
    return conditions


class TransactionRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._s = session

    async def get_by_id(self, transaction_id: UUID) -> Transaction | None:
        row = await self._s.get(TransactionModel, transaction_id)
        return _to_transaction(row) if row else None

    async def find(
        self,
        *,
        date_from: date | None = None,
        date_to: date | None = None,
        transaction_type: str | None = None,
        limit: int | None = 50,
        offset: int = 0,
    ) -> list[Transaction]:
        stmt = (
            select(TransactionModel)
            .where(*_conditions(date_from, date_to, transaction_type))
            .order_by(TransactionModel.transaction_date.desc(), TransactionModel.created_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        rows = (await self._s.execute(stmt)).scalars().all()
        return [_to_transaction(r) for r in rows]

    async def count(
        self,
        *,
        date_from: date | None = None,
        date_to: date | None = None,
        transaction_type: str | None = None,
    ) -> int:
        stmt = (
            select(sqlfunc.count())
            .select_from(TransactionModel)
            .where(*_conditions(date_from, date_to, transaction_type))
        )
        return (await self._s.execute(stmt)).scalar_one()

    async def save(self, transaction: Transaction) -> Transaction:
        existing = await self._s.get(TransactionModel, transaction.id)
        if existing:
            existing.transaction_type = str(transaction.transaction_type)
            existing.amount = transaction.amount
            existing.category = transaction.category
            existing.description = transaction.description
            existing.transaction_date = transaction.transaction_date
            existing.slip_url = transaction.slip_url
            existing.updated_at = datetime.now(timezone.utc)
        else:
            self._s.add(TransactionModel(
                id=transaction.id,
                transaction_type=str(transaction.transaction_type),
                amount=transaction.amount,
                category=transaction.category,
                description=transaction.description,
                transaction_date=transaction.transaction_date,
                created_by=transaction.created_by,
                slip_url=transaction.slip_url,
                created_at=transaction.created_at,
                updated_at=transaction.updated_at,
            ))
        await self._s.flush()
        return transaction

    async def delete(self, transaction_id: UUID) -> None:
        model = await self._s.get(TransactionModel, transaction_id)
        if model:
            await self._s.delete(model)
            await self._s.flush()


def _to_transaction(m: TransactionModel) -> Transaction:
    return Transaction(
        id=m.id,
        transaction_type=TransactionType(m.transaction_type),
        amount=m.amount,
        category=m.category,
        description=m.description,
        transaction_date=m.transaction_date,
        created_by=m.created_by,
        slip_url=m.slip_url,
        created_at=m.created_at,
        updated_at=m.updated_at,
    )
