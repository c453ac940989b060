"""Slip use-case commands: scan a slip, pre-fill a transaction, quick-save it."""
from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path

from quarion.application.finance.commands import create_transaction
from quarion.domain.finance.entities import DEFAULT_EXPENSE_CATEGORY, Transaction, TransactionType
from quarion.domain.finance.repositories import ITransactionRepository
from quarion.domain.slip.parser import parse
from quarion.domain.slip.value_objects import SlipData
from quarion.infrastructure.ocr.processor import hash_file, is_pdf

logger = logging.getLogger(__name__)

# bytes of an image or PDF → recognised text
Recognizer = Callable[[bytes], str]

_FALLBACK_BANK_LABEL = "ธนาคาร"
_PDF_CONTENT_TYPE = "application/pdf"


class SlipError(Exception):
    pass


class InvalidUploadError(SlipError):
    def __init__(self, message: str, *, too_large: bool = False) -> None:
        super().__init__(message)
        self.too_large = too_large


class OcrFailedError(SlipError):
    pass


class UnreadableSlipError(SlipError):
    pass


@dataclass
class TransactionDraft:
    """Form pre-fill derived from a slip; the user confirms or edits it."""
    transaction_type: TransactionType
    amount: Decimal | None
    transaction_date: date
    category: str
    description: str


@dataclass
class SlipScan:
    slip: SlipData
    draft: TransactionDraft
    file_hash: str

    @property
    def needs_review(self) -> bool:
        return self.slip.amount is None or self.slip.date is None


@dataclass
class QuickSlipResult:
    transaction: Transaction
    scan: SlipScan


def validate_upload(file_bytes: bytes, content_type: str | None, max_bytes: int) -> None:
    if not file_bytes:
        raise InvalidUploadError("Uploaded file is empty")
    if len(file_bytes) > max_bytes:
        raise InvalidUploadError(
            f"File too large (max {max_bytes // (1024 * 1024)} MB)", too_large=True,
        )
    if content_type and not (content_type.startswith("image/") or content_type == _PDF_CONTENT_TYPE):
        raise InvalidUploadError("Only image or PDF slips are accepted")


def describe_slip(slip: SlipData) -> str:
    """``สลิปจาก <bank> (Ref: <ref>)``; the ref part is omitted when unknown."""
    description = f"สลิปจาก {slip.bank_name or _FALLBACK_BANK_LABEL}"
    if slip.ref_number:
        description += f" (Ref: {slip.ref_number})"
    return description


def build_draft(slip: SlipData, today: date) -> TransactionDraft:
    return TransactionDraft(
        transaction_type=TransactionType.EXPENSE,
        amount=slip.amount,
        transaction_date=date.fromisoformat(slip.date) if slip.date else today,
        category=DEFAULT_EXPENSE_CATEGORY,
        description=describe_slip(slip),
    )


def scan_slip(file_bytes: bytes, *, recognizer: Recognizer, today: date | None = None) -> SlipScan:
    """OCR the slip, parse the text and derive a transaction draft."""
    started = time.perf_counter()
    try:
        text = recognizer(file_bytes)
    except Exception as exc:
        logger.warning("Slip OCR failed: %s", exc)
        raise OcrFailedError(f"Could not read the slip image: {exc}") from exc
    elapsed = time.perf_counter() - started

    slip = parse(text)
    logger.info(
        "Slip recognised in %.2fs: amount=%s date=%s bank=%s ref=%s",
        elapsed, slip.amount, slip.date, slip.bank_name, slip.ref_number,
    )
    scan = SlipScan(
        slip=slip,
        draft=build_draft(slip, today or date.today()),
        file_hash=hash_file(file_bytes),
    )
    if slip.is_empty:
        logger.warning("No slip fields recognised in %s", scan.file_hash[:12])
    elif scan.needs_review:
        logger.debug("Slip %s needs manual review", scan.file_hash[:12])
    return scan


def store_slip(file_bytes: bytes, filename: str | None, file_hash: str, storage_path: Path) -> str:
    """Persist slip bytes under ``<storage>/slips/<sha256><ext>``; identical slips share a file."""
    suffix = Path(filename).suffix.lower() if filename else ""
    if not suffix:
        suffix = ".pdf" if is_pdf(file_bytes) else ".jpg"
    slip_dir = storage_path / "slips"
    slip_dir.mkdir(parents=True, exist_ok=True)
    target = slip_dir / f"{file_hash}{suffix}"
    if not target.exists():
        target.write_bytes(file_bytes)
    return str(target)


async def quick_slip(
    *,
    file_bytes: bytes,
    filename: str | None,
    created_by: str,
    recognizer: Recognizer,
    repo: ITransactionRepository,
    storage_path: Path,
    today: date | None = None,
) -> QuickSlipResult:
    """Scan a slip and save it straight away as an expense transaction."""
    scan = await asyncio.to_thread(scan_slip, file_bytes, recognizer=recognizer, today=today)
    if scan.slip.amount is None:
        logger.warning("Quick slip rejected: no amount found (hash=%s)", scan.file_hash[:12])
        raise UnreadableSlipError("No transfer amount could be read from the slip")

    slip_url = store_slip(file_bytes, filename, scan.file_hash, storage_path)
    draft = scan.draft
    tx = await create_transaction(
        transaction_type=draft.transaction_type,
        amount=scan.slip.amount,
        category=draft.category,
        description=draft.description,
        transaction_date=draft.transaction_date,
        created_by=created_by,
        slip_url=slip_url,
        repo=repo,
    )
    return QuickSlipResult(transaction=tx, scan=scan)
