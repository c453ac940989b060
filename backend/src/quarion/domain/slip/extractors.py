"""Field extractors for Thai bank transfer slips.

Every extractor is a pure function of the OCR text and returns ``None`` when
nothing trustworthy is found. Pattern tables are scanned in declaration order
(first match wins) unless noted otherwise.
"""
from __future__ import annotations

import re
import unicodedata
from datetime import date
from decimal import Decimal, InvalidOperation

from .value_objects import BankName

# ── Normalisation ────────────────────────────────────────────────────────────


def _ascii_digit(ch: str) -> str:
    if ch.isdecimal() and not ch.isascii():
        return str(unicodedata.decimal(ch))
    return ch


def normalize_text(text: str) -> str:
    """Fold every decimal digit (Thai, fullwidth, Arabic-Indic) to ASCII and
    NIKHAHIT+SARA AA (OCR's "ํา") to SARA AM.
    """
    return "".join(map(_ascii_digit, text)).replace("ํา", "ำ")


# ── Amount ───────────────────────────────────────────────────────────────────

_MAX_AMOUNT = Decimal("100000000")

# A number that is not a fragment of a longer number, date or time. The match
# may not stop before a comma, so "1,500.5" cannot shrink to "1".
_NUMBER = r"(?<![\d.,])(\d[\d,]*(?:\.\d{2})?)(?![\d,/:\-]|\.\d)"
_CURRENCY = r"(?:฿|THB|บาท)"

_AMOUNT_MARKER_PATTERNS = [
    re.compile(rf"{_CURRENCY}\s*{_NUMBER}", re.IGNORECASE),   # ฿1,000 / THB 1000
    re.compile(rf"{_NUMBER}\s*{_CURRENCY}", re.IGNORECASE),   # 1,000.00 บาท
]

_AMOUNT_LABEL_PATTERNS = [
    re.compile(rf"จำนวน(?:เงิน)?[:\s]*{_NUMBER}"),
    re.compile(rf"amount[:\s]*{_NUMBER}", re.IGNORECASE),
    re.compile(rf"ยอดเงิน[:\s]*{_NUMBER}"),
    re.compile(rf"โอน(?:เงิน)?[:\s]*{_NUMBER}"),
]

# Generic "looks like money": exactly two decimals, optional thousands commas.
_MONEY_SHAPE = re.compile(r"(?<![\d.,])(\d[\d,]*\.\d{2})(?!\d|\.\d)")


def _to_amount(raw: str) -> Decimal | None:
    try:
        value = Decimal(raw.replace(",", ""))
    except InvalidOperation:
        return None
    if 0 < value < _MAX_AMOUNT:
        return value
    return None


def _first_valid_amount(patterns: list[re.Pattern], text: str) -> Decimal | None:
    for pattern in patterns:
        for m in pattern.finditer(text):
            value = _to_amount(m.group(1))
            if value is not None:
                return value
    return None


def extract_amount(text: str) -> Decimal | None:
    """Return the transferred amount in baht.

    Precedence: currency-marked numbers, then labelled numbers (first valid
    match wins in both), then the largest two-decimal number in the text.
    """
    text = normalize_text(text)

    for tier in (_AMOUNT_MARKER_PATTERNS, _AMOUNT_LABEL_PATTERNS):
        value = _first_valid_amount(tier, text)
        if value is not None:
            return value

    candidates = [
        value for value in (_to_amount(raw) for raw in _MONEY_SHAPE.findall(text))
        if value is not None
    ]
    return max(candidates) if candidates else None


# ── Date ─────────────────────────────────────────────────────────────────────

_BUDDHIST_ERA_OFFSET = 543
_BUDDHIST_ERA_THRESHOLD = 2500

_NUMERIC_DATE = re.compile(r"(?<!\d)(\d{1,2})[/\-](\d{1,2})[/\-](\d{4}|\d{2})(?!\d)")

# (spelling, month): abbreviated then full form, in calendar order.
THAI_MONTHS: list[tuple[str, int]] = [
    ("ม.ค.", 1), ("มกราคม", 1),
    ("ก.พ.", 2), ("กุมภาพันธ์", 2),
    ("มี.ค.", 3), ("มีนาคม", 3),
    ("เม.ย.", 4), ("เมษายน", 4),
    ("พ.ค.", 5), ("พฤษภาคม", 5),
    ("มิ.ย.", 6), ("มิถุนายน", 6),
    ("ก.ค.", 7), ("กรกฎาคม", 7),
    ("ส.ค.", 8), ("สิงหาคม", 8),
    ("ก.ย.", 9), ("กันยายน", 9),
    ("ต.ค.", 10), ("ตุลาคม", 10),
    ("พ.ย.", 11), ("พฤศจิกายน", 11),
    ("ธ.ค.", 12), ("ธันวาคม", 12),
]

_THAI_MONTH_PATTERNS: list[tuple[re.Pattern, int]] = [
    (re.compile(rf"(?<!\d)(\d{{1,2}})\s*{re.escape(name)}\s*(\d{{4}}|\d{{2}})(?!\d)"), month)
    for name, month in THAI_MONTHS
]


def to_gregorian_year(raw_year: int) -> int:
    """Convert a Buddhist Era year (anything above 2500) to Gregorian."""
    if raw_year > _BUDDHIST_ERA_THRESHOLD:
        return raw_year - _BUDDHIST_ERA_OFFSET
    return raw_year


def _resolve_year(token: str) -> int:
    # Two-digit years on Thai slips are short BE years: "68" → 2568.
    if len(token) == 2:
        token = "25" + token
    return to_gregorian_year(int(token))


def _to_iso_date(day: str, month: int, year_token: str) -> str | None:
    try:
        return date(_resolve_year(year_token), month, int(day)).isoformat()
    except ValueError:
        return None


def extract_date(text: str) -> str | None:
    """Return the slip date as ``YYYY-MM-DD``.

    Tries numeric ``D/M/Y`` first, then ``D <Thai month> Y``. Impossible
    calendar dates are skipped rather than returned.
    """
    text = normalize_text(text)

    for m in _NUMERIC_DATE.finditer(text):
        day, month, year = m.groups()
        iso = _to_iso_date(day, int(month), year)
        if iso is not None:
            return iso

    for pattern, month in _THAI_MONTH_PATTERNS:
        for m in pattern.finditer(text):
            iso = _to_iso_date(m.group(1), month, m.group(2))
            if iso is not None:
                return iso
    return None


# ── Time ─────────────────────────────────────────────────────────────────────

_TIME_SUFFIX = r"(?:\s*น\.?)?"
# Colon times are unambiguous; period times are the OCR-confusion fallback.
_TIME_PATTERNS = [
    re.compile(rf"(?<![\d.,:])(\d{{1,2}}):(\d{{2}})(?::(\d{{2}}))?(?!\d){_TIME_SUFFIX}"),
    re.compile(rf"(?<![\d.,:])(\d{{1,2}})[:.](\d{{2}})(?:[:.](\d{{2}}))?(?!\d){_TIME_SUFFIX}"),
]


def extract_time(text: str) -> str | None:
    """Return the slip time as ``HH:MM`` (seconds are dropped)."""
    text = normalize_text(text)
    for pattern in _TIME_PATTERNS:
        for m in pattern.finditer(text):
            hours, minutes, seconds = m.groups()
            if int(hours) > 23 or int(minutes) > 59:
                continue
            if seconds is not None and int(seconds) > 59:
                continue
            return f"{hours.zfill(2)}:{minutes}"
    return None


# ── Bank ─────────────────────────────────────────────────────────────────────

def _latin(token: str) -> str:
    # Latin tickers must not be glued to other Latin letters ("bay" in "ebay").
    return rf"(?<![a-z]){token}(?![a-z])"


_KBANK_TICKERS = _latin(r"k-?bank") + "|" + _latin(r"k\s?plus")

_BANK_PATTERNS: list[tuple[BankName, re.Pattern]] = [
    (BankName.PROMPTPAY, re.compile(r"พร้อมเพย์|พรอมเพย|prompt\s?pay", re.IGNORECASE)),
    (BankName.KBANK, re.compile(rf"กสิกร|kasikorn|{_KBANK_TICKERS}", re.IGNORECASE)),
    (BankName.SCB, re.compile(rf"ไทยพาณิชย์|siam\s+commercial|{_latin('scb')}", re.IGNORECASE)),
    (BankName.BANGKOK_BANK, re.compile(rf"กรุงเทพ|bangkok\s+bank|{_latin('bbl')}", re.IGNORECASE)),
    (BankName.KRUNGTHAI, re.compile(rf"กรุงไทย|krung\s?thai|{_latin('ktb')}", re.IGNORECASE)),
    (BankName.TMB, re.compile(
        rf"ทหารไทย|tmb\s?thanachart|{_latin('tmb')}|{_latin('ttb')}", re.IGNORECASE)),
    (BankName.KRUNGSRI, re.compile(rf"กรุงศรี|krungsri|ayudhya|{_latin('bay')}", re.IGNORECASE)),
    (BankName.GSB, re.compile(rf"ออมสิน|{_latin('gsb')}", re.IGNORECASE)),
]


def identify_bank(text: str) -> BankName | None:
    """Return the first bank (in table order) whose branding appears in the text."""
    for bank, pattern in _BANK_PATTERNS:
        if pattern.search(text):
            return bank
    return None


# ── Reference number ─────────────────────────────────────────────────────────

_REF_PATTERNS = [
    # Labels are case-insensitive; the token itself must be upper-case.
    re.compile(r"(?:(?<![A-Za-z])(?i:ref(?:erence)?(?:\s*no)?\.?)|อ้างอิง|เลขที่)[:\s]*([A-Z0-9]+)"),
    re.compile(r"(?:(?<![A-Za-z])(?i:transaction(?:\s*(?:id|no))?\.?)|รายการ)[:\s]*([A-Z0-9]+)"),
    re.compile(r"(?<![A-Za-z0-9])([A-Z]{2,}\d{10,})"),
]


def extract_ref_number(text: str) -> str | None:
    """Return the bank reference / transaction code exactly as printed."""
    for pattern in _REF_PATTERNS:
        m = pattern.search(text)
        if m:
            return m.group(1)
    return None
