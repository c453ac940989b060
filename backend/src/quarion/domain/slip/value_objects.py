"""Immutable value objects for the Slip bounded context."""
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum


class BankName(StrEnum):
    """Payment rails / banks recognised from slip branding.

    Declaration order is the scan order used by the bank identifier.
    """
    PROMPTPAY = "PromptPay"
    KBANK = "K-Bank"
    SCB = "SCB"
    BANGKOK_BANK = "Bangkok Bank"
    KRUNGTHAI = "Krungthai"
    TMB = "TMB"
    KRUNGSRI = "Krungsri"
    GSB = "GSB"


@dataclass(frozen=True)
class SlipData:
    """Fields extracted from the recognised text of one transfer slip.

    Every field except ``raw_text`` may be ``None`` independently; a present
    field has already passed its extractor's validity check.
    """
    raw_text: str
    amount: Decimal | None = None
    date: str | None = None       # YYYY-MM-DD (Gregorian)
    time: str | None = None       # HH:MM, 24-hour
    bank_name: BankName | None = None
    ref_number: str | None = None

    @property
    def is_empty(self) -> bool:
        return all(
            v is None for v in (self.amount, self.date, self.time, self.bank_name, self.ref_number)
        )
