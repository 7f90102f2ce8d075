"""RTGS sheet parser.

Columns: BANK NAME, IFSC, MICR_CODE, BRANCH, ADDRESS, CITY1, CITY2, STATE,
STD CODE, PHONE.

CITY1 and CITY2 are not used consistently by the publisher (compare
LAVB0000882 and LAVB0000883, which have them flipped). CITY1 is taken as both
centre and district, CITY2 as city.
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
from ifsc_scraper.sources.repair import fix_rtgs_row_alignment, needs_rtgs_realignment


class RtgsParser(BaseSourceParser):
    """Parser for the RTGS branch list."""

    source = "RTGS"
    required_columns = frozenset(
        {
            "BANK NAME",
            "IFSC",
            "MICR_CODE",
            "BRANCH",
            "ADDRESS",
            "CITY1",
            "CITY2",
            "STATE",
            "STD CODE",
            "PHONE",
        }
    )

    def repair(self, row: Row) -> Row:
        if needs_rtgs_realignment(row):
            return fix_rtgs_row_alignment(row)
        return row

    def build_record(self, ifsc: str, row: Row) -> BranchRecord:
        return {
            "BANK": sanitize_text(row.get("BANK NAME"), "BANK"),
            "IFSC": ifsc,
            "BRANCH": sanitize_text(row.get("BRANCH"), "BRANCH"),
            "CENTRE": sanitize_text(row.get("CITY1"), "CENTRE"),
            "DISTRICT": sanitize_text(row.get("CITY1"), "DISTRICT"),
            "STATE": sanitize_text(row.get("STATE"), "STATE"),
            "ADDRESS": sanitize_text(row.get("ADDRESS"), "ADDRESS"),
            "CONTACT": normalize_contact(row.get("STD CODE"), row.get("PHONE")),
            "CITY": sanitize_text(row.get("CITY2"), "CITY"),
            "MICR": extract_micr(row.get("MICR_CODE")),
            "RTGS": True,
            "UPI": has_upi(self.banks, ifsc),
        }
