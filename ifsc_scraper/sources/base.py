"""
Base source parser.

Defines the row pipeline shared by every source: skip invalid rows, repair,
normalize the identifier, build the record, keep the first occurrence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

import structlog

from ifsc_scraper.normalization.models import BankEntry, BranchRecord, Dataset
from ifsc_scraper.normalization.normalizer import (
    DEFAULT_INVALID_IDENTIFIERS,
    normalize_identifier,
)

logger = structlog.get_logger(__name__)

Row = Mapping[str, Any]


@dataclass
class ParseStats:
    """Counters for a single parsing pass."""

    source: str
    rows_seen: int = 0
    records: int = 0
    dropped: int = 0
    duplicates: int = 0
    repaired: int = 0


class BaseSourceParser(ABC):
    """
    Abstract base class for source parsers.

    Subclasses name their IFSC column and turn an accepted row into a
    BranchRecord. Each parser only knows about its own source; merging with
    other sources happens later.
    """

    source: str = "UNKNOWN"
    identifier_column: str = "IFSC"
    # Header columns each input chunk must carry
    required_columns: frozenset[str] = frozenset()

    def __init__(
        self,
        banks: Mapping[str, BankEntry],
        invalid_identifiers: Sequence[str] = DEFAULT_INVALID_IDENTIFIERS,
    ):
        """
        Initialize the parser.

        Args:
            banks: Bank capability table, used for the UPI flag
            invalid_identifiers: IFSC column values that are not identifiers
        """
        self.banks = banks
        self.invalid_identifiers = tuple(invalid_identifiers)
        self.stats = ParseStats(source=self.source)

    def accept(self, row: Row) -> bool:
        """Structural checks run before any normalization."""
        raw = (row.get(self.identifier_column) or "").strip()
        if not raw:
            return False
        # Repeated header row in the middle of a sheet
        if raw.upper() == self.identifier_column.upper():
            return False
        return True

    def repair(self, row: Row) -> Row:
        """Hook for source specific column repair."""
        return row

    @abstractmethod
    def build_record(self, ifsc: str, row: Row) -> BranchRecord:
        """Build the normalized record for an accepted row."""

    def parse(self, rows: Iterable[Row]) -> Dataset:
        """
        Parse rows into an IFSC keyed dataset for this source.

        Args:
            rows: Field maps, one per input row

        Returns:
            Mapping from IFSC to normalized record

        Raises:
            IdentifierError: an identifier cannot be repaired safely
        """
        self.stats = ParseStats(source=self.source)
        data: Dataset = {}

        for row in rows:
            self.stats.rows_seen += 1

            if not self.accept(row):
                self.stats.dropped += 1
                logger.debug(
                    "source.row_skipped",
                    source=self.source,
                    value=row.get(self.identifier_column),
                )
                continue

            repaired = self.repair(row)
            if repaired is not row:
                self.stats.repaired += 1

            ifsc = normalize_identifier(
                repaired.get(self.identifier_column), self.invalid_identifiers
            )
            if ifsc is None:
                self.stats.dropped += 1
                continue

            if ifsc in data:
                self.stats.duplicates += 1
                logger.warning(f"Second Entry found for {ifsc}, discarding", source=self.source)
                continue

            data[ifsc] = self.build_record(ifsc, repaired)

        self.stats.records = len(data)
        logger.info(
            "source.parsed",
            source=self.source,
            rows=self.stats.rows_seen,
            records=self.stats.records,
            dropped=self.stats.dropped,
            duplicates=self.stats.duplicates,
            repaired=self.stats.repaired,
        )
        return data
