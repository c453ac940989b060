from decimal import Decimal

import pytest

from quarion.domain.slip.parser import SlipParser, parse
from quarion.domain.slip.value_objects import BankName, SlipData

KBANK_SLIP = (
    "โอนเงินผ่านกสิกร จำนวน 1,500.50 บาท วันที่ 15/03/68 "
    "เวลา 14:30 น. Ref: ABC1234567890"
)

SCB_SLIP = """SCB
โอนเงินสำเร็จ
15 มกราคม 2567 - 09:41
จาก นาย ก. xxx-x-x1234-x
ไปยัง ร้านค้า ตัวอย่าง
จำนวนเงิน
2,450.00
ค่าธรรมเนียม 0.00 บาท
รหัสอ้างอิง: 202401151234SCB0001"""

SAMPLES = [KBANK_SLIP, SCB_SLIP, "100.00 และ 25,000.00", "สวัสดีครับ ขอบคุณ", ""]


def test_kbank_slip():
    slip = parse(KBANK_SLIP)
    assert slip.amount == Decimal("1500.50")
    assert slip.date == "2025-03-15"
    assert slip.time == "14:30"
    assert slip.bank_name == BankName.KBANK
    assert slip.ref_number == "ABC1234567890"
    assert slip.raw_text == KBANK_SLIP


def test_multiline_scb_slip():
    slip = parse(SCB_SLIP)
    assert slip.amount == Decimal("2450.00")
    assert slip.date == "2024-01-15"
    assert slip.time == "09:41"
    assert slip.bank_name == BankName.SCB
    assert slip.ref_number == "202401151234SCB0001"


def test_largest_amount_fallback():
    assert parse("100.00 และ 25,000.00").amount == Decimal("25000.00")


def test_thai_month_date():
    assert parse("15 มกราคม 2567").date == "2024-01-15"


def test_nothing_recognisable():
    text = "สวัสดีครับ ขอบคุณ"
    slip = parse(text)
    assert slip == SlipData(raw_text=text)
    assert slip.is_empty


def test_amount_above_ceiling_is_absent():
    assert parse("999,999,999.99").amount is None


@pytest.mark.parametrize("text", [None, "", "   \n\t", "฿฿฿ ::: ///", "\x00�"])
def test_never_raises(text):
    slip = parse(text)
    assert slip.raw_text == (text or "")


@pytest.mark.parametrize("text", SAMPLES)
def test_parse_is_idempotent(text):
    assert parse(text) == parse(text)
    assert SlipParser().parse(text) == parse(text)


@pytest.mark.parametrize("text", SAMPLES)
def test_invariants(text):
    slip = parse(text)
    assert slip.raw_text == text
    if slip.amount is not None:
        assert Decimal("0") < slip.amount < Decimal("100000000")
    if slip.date is not None:
        year, month, day = slip.date.split("-")
        assert (len(year), len(month), len(day)) == (4, 2, 2)
    if slip.bank_name is not None:
        assert slip.bank_name in set(BankName)


def test_slip_data_is_immutable():
    slip = parse(KBANK_SLIP)
    with pytest.raises(AttributeError):
        slip.amount = Decimal("1")

