"""NEFT sheet parser.

Columns: BANK, IFSC, MICR CODE, BRANCH, ADDRESS, STD CODE, CONTACT, CITY,
DISTRICT, STATE.
"""

from __future__ import annotations

from ifsc_scraper.normalization.banks import has_upi
from ifsc_scraper.normalization.models import BranchRecord
from ifsc_scraper.normalization.normalizer import (
    extract_micr,
    normalize_contact,
    sanitize_text,
)
from ifsc_scraper.sources.base import BaseSourceParser, Row


class NeftParser(BaseSourceParser):
    """Parser for the NEFT branch list."""

    source = "NEFT"
    required_columns = frozenset(
        {"BANK", "IFSC", "BRANCH", "ADDRESS", "STD CODE", "CONTACT", "CITY", "DISTRICT", "STATE"}
    )

    def build_record(self, ifsc: str, row: Row) -> BranchRecord:
        return {
            "BANK": sanitize_text(row.get("BANK"), "BANK"),
            "IFSC": ifsc,
            "BRANCH": sanitize_text(row.get("BRANCH"), "BRANCH"),
            # NEFT has no centre column; filled in from RTGS when merging
            "CENTRE": None,
            "DISTRICT": sanitize_text(row.get("DISTRICT"), "DISTRICT"),
            "STATE": sanitize_text(row.get("STATE"), "STATE"),
            "ADDRESS": sanitize_text(row.get("ADDRESS"), "ADDRESS"),
            "CONTACT": normalize_contact(row.get("STD CODE"), row.get("CONTACT")),
            "CITY": sanitize_text(row.get("CITY"), "CITY"),
            "MICR": extract_micr(row.get("MICR CODE")),
            "NEFT": True,
            "UPI": has_upi(self.banks, ifsc),
        }
