"""Slips router: scan a slip for review, or quick-save it as a transaction."""
import logging
from typing import Annotated

from fastapi import APIRouter, Form, HTTPException, UploadFile, status

from quarion.application.slip.commands import (
    InvalidUploadError,
    OcrFailedError,
    SlipError,
    SlipScan,
    UnreadableSlipError,
)
from quarion.domain.slip.value_objects import SlipData
from quarion.interfaces.api.v1.routers.transactions import tx_response
from quarion.interfaces.api.v1.schemas.slip import (
    QuickSlipResponse,
    SlipDataResponse,
    SlipScanResponse,
    TransactionDraftResponse,
)
from quarion.interfaces.dependencies import Facade, QuickSlipAuth

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/slips", tags=["slips"])

_DEFAULT_QUICK_SLIP_USER = "shortcut-user"


def _raise_http(exc: SlipError) -> None:
    if isinstance(exc, InvalidUploadError):
        code = (
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE if exc.too_large
            else status.HTTP_422_UNPROCESSABLE_ENTITY
        )
    elif isinstance(exc, OcrFailedError):
        code = status.HTTP_502_BAD_GATEWAY
    elif isinstance(exc, UnreadableSlipError):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    else:
        code = status.HTTP_400_BAD_REQUEST
    logger.info("Slip request rejected (%d): %s", code, exc)
    raise HTTPException(status_code=code, detail=str(exc))


@router.post("/scan", response_model=SlipScanResponse)
async def scan_slip(file: UploadFile, facade: Facade):
    file_bytes = await file.read()
    try:
        scan = await facade.scan_slip(file_bytes, file.content_type)
    except SlipError as exc:
        _raise_http(exc)
    return _scan_response(scan)


@router.post(
    "/quick",
    response_model=QuickSlipResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[QuickSlipAuth],
)
async def quick_slip(
    file: UploadFile,
    facade: Facade,
    user_id: Annotated[str | None, Form()] = None,
):
    file_bytes = await file.read()
    try:
        result = await facade.quick_slip(
            file_bytes, file.content_type, file.filename, user_id or _DEFAULT_QUICK_SLIP_USER,
        )
    except SlipError as exc:
        _raise_http(exc)
    return QuickSlipResponse(
        transaction=tx_response(result.transaction),
        slip=_slip_response(result.scan.slip),
    )


def _slip_response(slip: SlipData) -> SlipDataResponse:
    return SlipDataResponse(
        amount=slip.amount,
        date=slip.date,
        time=slip.time,
        bank_name=str(slip.bank_name) if slip.bank_name else None,
        ref_number=slip.ref_number,
        raw_text=slip.raw_text,
    )


def _scan_response(scan: SlipScan) -> SlipScanResponse:
    draft = scan.draft
    return SlipScanResponse(
        slip=_slip_response(scan.slip),
        draft=TransactionDraftResponse(
            transaction_type=str(draft.transaction_type),
            amount=draft.amount,
            transaction_date=draft.transaction_date,
            category=draft.category,
            description=draft.description,
        ),
        needs_review=scan.needs_review,
        file_hash=scan.file_hash,
    )
