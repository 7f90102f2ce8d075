"""Source parsers for the NEFT, RTGS and IMPS branch lists."""

from ifsc_scraper.sources.base import BaseSourceParser, ParseStats
from ifsc_scraper.sources.imps import ImpsParser, bank_table_rows
from ifsc_scraper.sources.neft import NeftParser
from ifsc_scraper.sources.reader import chunk_paths, read_csv_chunks
from ifsc_scraper.sources.repair import (
    RTGS_SHIFT_MAPPING,
    fix_rtgs_row_alignment,
    needs_rtgs_realignment,
)
from ifsc_scraper.sources.rtgs import RtgsParser

__all__ = [
    "BaseSourceParser",
    "ParseStats",
    "ImpsParser",
    "NeftParser",
    "RtgsParser",
    "bank_table_rows",
    "chunk_paths",
    "read_csv_chunks",
    "RTGS_SHIFT_MAPPING",
    "fix_rtgs_row_alignment",
    "needs_rtgs_realignment",
]
