"""Finance use-case commands: create, update and delete transactions."""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from quarion.domain.finance.entities import Transaction, TransactionType
from quarion.domain.finance.repositories import ITransactionRepository

logger = logging.getLogger(__name__)


class FinanceError(Exception):
    pass


class NotFoundError(FinanceError):
    pass


async def create_transaction(
    *,
    transaction_type: str,
    amount: Decimal,
    category: str,
    description: str,
    transaction_date: date,
    created_by: str,
    slip_url: str | None = None,
    repo: ITransactionRepository,
) -> Transaction:
    tx = Transaction(
        id=uuid4(),
        transaction_type=TransactionType(transaction_type),
        amount=amount,
        category=category,
        description=description,
        transaction_date=transaction_date,
        created_by=created_by,
        slip_url=slip_url,
    )
    tx = await repo.save(tx)
    logger.info("Created %s transaction %s (%s THB)", tx.transaction_type, tx.id, tx.amount)
    return tx


async def update_transaction(
    *,
    transaction_id: UUID,
    transaction_type: str | None = None,
    amount: Decimal | None = None,
    category: str | None = None,
    description: str | None = None,
    transaction_date: date | None = None,
    repo: ITransactionRepository,
) -> Transaction:
    tx = await repo.get_by_id(transaction_id)
    if tx is None:
        raise NotFoundError(f"Transaction {transaction_id} not found")

    if amount is not None:
        if amount <= 0:
            raise ValueError("Transaction amount must be positive")
        tx.amount = amount
    if transaction_type is not None:
        tx.transaction_type = TransactionType(transaction_type)
    if category is not None:
        tx.category = category
    if description is not None:
        tx.description = description
    if transaction_date is not None:
        tx.transaction_date = transaction_date
    tx.updated_at = datetime.now(timezone.utc)
    return await repo.save(tx)


async def delete_transaction(*, transaction_id: UUID, repo: ITransactionRepository) -> None:
    tx = await repo.get_by_id(transaction_id)
    if tx is None:
        raise NotFoundError(f"Transaction {transaction_id} not found")
    await repo.delete(transaction_id)
    logger.info("Deleted transaction %s", transaction_id)
