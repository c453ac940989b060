"""Slip text → SlipData."""
from .extractors import (
    extract_amount,
    extract_date,
    extract_ref_number,
    extract_time,
    identify_bank,
)
from .value_objects import SlipData


class SlipParser:
    """Stateless facade over the field extractors.

    Each extractor runs independently; a field that cannot be extracted is
    simply absent, so parsing never fails.
    """

    def parse(self, raw_text: str | None) -> SlipData:
        text = raw_text or ""
        return SlipData(
            raw_text=text,
            amount=extract_amount(text),
            date=extract_date(text),
            time=extract_time(text),
            bank_name=identify_bank(text),
            ref_number=extract_ref_number(text),
        )


_default_parser = SlipParser()


def parse(raw_text: str | None) -> SlipData:
    return _default_parser.parse(raw_text)
