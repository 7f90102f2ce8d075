"""IMPS parser.

There is no branch level IMPS list. Every bank in the capability table that
declares a head-office IFSC contributes one IMPS record.
"""

from __future__ import annotations

from typing import Iterator, Mapping

from ifsc_scraper.normalization.models import (
    IFSC_LENGTH,
    NOT_AVAILABLE,
    BankEntry,
    BranchRecord,
)
from ifsc_scraper.normalization.normalizer import sanitize_text
from ifsc_scraper.sources.base import BaseSourceParser, Row


def bank_table_rows(
    banks: Mapping[str, BankEntry], bank_names: Mapping[str, str]
) -> Iterator[dict]:
    """Turn the bank table into IMPS rows, ordered by bank code."""
    for code in sorted(banks):
        entry = banks[code]
        yield {
            "BANK CODE": code,
            "BANK": bank_names.get(code) or entry.name,
            "IFSC": entry.ifsc,
            "UPI": entry.upi,
        }


class ImpsParser(BaseSourceParser):
    """Parser for rows derived from the bank table."""

    source = "IMPS"

    def accept(self, row: Row) -> bool:
        if not super().accept(row):
            return False
        return len(str(row["IFSC"]).strip()) == IFSC_LENGTH

    def build_record(self, ifsc: str, row: Row) -> BranchRecord:
        bank = sanitize_text(row.get("BANK"), "BANK")
        return {
            "BANK": bank,
            "IFSC": ifsc,
            "BRANCH": f"{bank} IMPS",
            "CENTRE": NOT_AVAILABLE,
            "DISTRICT": NOT_AVAILABLE,
            "STATE": NOT_AVAILABLE,
            "ADDRESS": NOT_AVAILABLE,
            "CONTACT": None,
            "CITY": NOT_AVAILABLE,
            "IMPS": True,
            "UPI": bool(row.get("UPI")),
        }
