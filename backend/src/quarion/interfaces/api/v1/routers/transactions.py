"""Transactions router: CRUD + dashboard aggregations."""
from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from quarion.application.finance.commands import NotFoundError
from quarion.interfaces.api.v1.schemas.finance import (
    CategoryTotalResponse,
    MonthlyTotalsResponse,
    SummaryResponse,
    TransactionCreate,
    TransactionListResponse,
    TransactionResponse,
    TransactionUpdate,
)
from quarion.interfaces.dependencies import Facade

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("/summary", response_model=SummaryResponse)
async def summary(facade: Facade, today: Annotated[date | None, Query()] = None):
    result = await facade.get_summary(today or date.today())
    return SummaryResponse.model_validate(result)


@router.get("/monthly", response_model=list[MonthlyTotalsResponse])
async def monthly(
    facade: Facade,
    today: Annotated[date | None, Query()] = None,
    months: Annotated[int, Query(ge=1, le=24)] = 6,
):
    rows = await facade.get_monthly_data(today or date.today(), months)
    return [MonthlyTotalsResponse.model_validate(r) for r in rows]


@router.get("/categories", response_model=list[CategoryTotalResponse])
async def category_breakdown(facade: Facade):
    rows = await facade.get_category_breakdown()
    return [CategoryTotalResponse.model_validate(r) for r in rows]


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    facade: Facade,
    date_from: Annotated[date | None, Query()] = None,
    date_to: Annotated[date | None, Query()] = None,
    transaction_type: Annotated[str | None, Query(pattern="^(income|expense)$")] = None,
    limit: Annotated[int, Query(ge=1, le=500)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    txs, total = await facade.list_transactions_with_count(
        date_from=date_from, date_to=date_to, transaction_type=transaction_type,
        limit=limit, offset=offset,
    )
    return TransactionListResponse(
        items=[tx_response(tx) for tx in txs],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(body: TransactionCreate, facade: Facade):
    tx = await facade.create_transaction(
        transaction_type=body.transaction_type,
        amount=body.amount,
        category=body.category,
        description=body.description,
        transaction_date=body.transaction_date,
        created_by=body.created_by,
    )
    return tx_response(tx)


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(transaction_id: UUID, facade: Facade):
    tx = await facade.get_transaction(transaction_id)
    if tx is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return tx_response(tx)


@router.patch("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(transaction_id: UUID, body: TransactionUpdate, facade: Facade):
    try:
        tx = await facade.update_transaction(transaction_id, **body.model_dump(exclude_none=True))
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return tx_response(tx)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(transaction_id: UUID, facade: Facade):
    try:
        await facade.delete_transaction(transaction_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")


def tx_response(tx) -> TransactionResponse:
    return TransactionResponse(
        id=tx.id,
        transaction_type=str(tx.transaction_type),
        amount=tx.amount,
        category=tx.category,
        description=tx.description,
        transaction_date=tx.transaction_date,
        created_by=tx.created_by,
        slip_url=tx.slip_url,
        created_at=tx.created_at,
        updated_at=tx.updated_at,
    )
