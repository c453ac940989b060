import asyncio
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from conftest import PNG_BYTES, FakeRecognizer
from quarion.application.slip.commands import (
    InvalidUploadError,
    OcrFailedError,
    UnreadableSlipError,
    build_draft,
    describe_slip,
    quick_slip,
    scan_slip,
    validate_upload,
)
from quarion.domain.finance.entities import TransactionType
from quarion.domain.slip.parser import parse
from quarion.infrastructure.ocr.processor import hash_file

TODAY = date(2025, 4, 1)


def test_scan_slip_builds_draft(recognizer):
    scan = scan_slip(PNG_BYTES, recognizer=recognizer, today=TODAY)

    assert recognizer.calls == [PNG_BYTES]
    assert scan.slip.amount == Decimal("1500.50")
    assert scan.draft.amount == Decimal("1500.50")
    assert scan.draft.transaction_date == date(2025, 3, 15)
    assert scan.draft.transaction_type == TransactionType.EXPENSE
    assert scan.draft.category == "ค่าใช้จ่ายอื่นๆ"
    assert scan.draft.description == "สลิปจาก K-Bank (Ref: ABC1234567890)"
    assert scan.file_hash == hash_file(PNG_BYTES)
    assert not scan.needs_review


def test_scan_slip_without_date_uses_today_and_needs_review():
    scan = scan_slip(PNG_BYTES, recognizer=FakeRecognizer("ยอดเงิน 99.00 บาท"), today=TODAY)
    assert scan.draft.transaction_date == TODAY
    assert scan.needs_review


def test_scan_slip_warns_when_nothing_recognised(caplog):
    with caplog.at_level("WARNING", logger="quarion.application.slip.commands"):
        scan = scan_slip(PNG_BYTES, recognizer=FakeRecognizer("สวัสดีครับ"), today=TODAY)
    assert scan.slip.is_empty
    assert "No slip fields recognised" in caplog.text


def test_scan_slip_wraps_ocr_errors():
    failing = FakeRecognizer(error=RuntimeError("model load failed"))
    with pytest.raises(OcrFailedError, match="model load failed"):
        scan_slip(PNG_BYTES, recognizer=failing)


@pytest.mark.parametrize("text,expected", [
    ("SCB", "สลิปจาก SCB"),
    ("Ref: XYZ1", "สลิปจาก ธนาคาร (Ref: XYZ1)"),
    ("", "สลิปจาก ธนาคาร"),
])
def test_describe_slip(text, expected):
    assert describe_slip(parse(text)) == expected


def test_build_draft_keeps_missing_amount():
    draft = build_draft(parse("วันที่ 01/04/2568"), TODAY)
    assert draft.amount is None
    assert draft.transaction_date == date(2025, 4, 1)


@pytest.mark.parametrize("content_type", ["image/jpeg", "image/png", "application/pdf", None])
def test_validate_upload_accepts(content_type):
    validate_upload(PNG_BYTES, content_type, max_bytes=1024)


def test_validate_upload_rejects_other_types():
    with pytest.raises(InvalidUploadError) as exc_info:
        validate_upload(PNG_BYTES, "text/plain", max_bytes=1024)
    assert not exc_info.value.too_large


def test_validate_upload_rejects_large_files():
    with pytest.raises(InvalidUploadError) as exc_info:
        validate_upload(b"x" * 2048, "image/png", max_bytes=1024)
    assert exc_info.value.too_large


def test_validate_upload_rejects_empty():
    with pytest.raises(InvalidUploadError):
        validate_upload(b"", "image/png", max_bytes=1024)


def test_quick_slip_persists_transaction(recognizer, memory_repo, tmp_path: Path):
    result = asyncio.run(quick_slip(
        file_bytes=PNG_BYTES,
        filename="slip.PNG",
        created_by="shortcut-user",
        recognizer=recognizer,
        repo=memory_repo,
        storage_path=tmp_path,
        today=TODAY,
    ))

    tx = result.transaction
    assert tx.amount == Decimal("1500.50")
    assert tx.transaction_date == date(2025, 3, 15)
    assert tx.created_by == "shortcut-user"
    assert tx.description == "สลิปจาก K-Bank (Ref: ABC1234567890)"

    stored = Path(tx.slip_url)
    assert stored == tmp_path / "slips" / f"{hash_file(PNG_BYTES)}.png"
    assert stored.read_bytes() == PNG_BYTES

    assert asyncio.run(memory_repo.get_by_id(tx.id)) == tx


def test_quick_slip_without_amount_persists_nothing(memory_repo, tmp_path: Path):
    with pytest.raises(UnreadableSlipError):
        asyncio.run(quick_slip(
            file_bytes=PNG_BYTES,
            filename="slip.jpg",
            created_by="u1",
            recognizer=FakeRecognizer("กสิกร 15/03/68"),
            repo=memory_repo,
            storage_path=tmp_path,
        ))
    assert asyncio.run(memory_repo.count()) == 0
    assert not (tmp_path / "slips").exists()
