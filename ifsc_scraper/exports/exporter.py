"""Serialization of the final dataset.

Outputs (relative to the output directory):
- IFSC.csv          one row per branch, fixed column order
- by-bank/XXXX.json branches of one bank keyed by IFSC
- IFSC.json         bank code -> compact branch suffixes
- IFSC-list.json    every IFSC, sorted
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Iterable, Union

import structlog

from ifsc_scraper.normalization.models import NOT_AVAILABLE, Dataset, bank_code

logger = structlog.get_logger(__name__)

CSV_COLUMNS = (
    "BANK",
    "IFSC",
    "BRANCH",
    "CENTRE",
    "DISTRICT",
    "STATE",
    "ADDRESS",
    "CONTACT",
    "IMPS",
    "RTGS",
    "CITY",
    "NEFT",
    "MICR",
    "UPI",
    "SWIFT",
)

BRANCH_SUFFIX_LENGTH = 6

Suffix = Union[int, str]


def _csv_value(value: Any) -> str:
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def export_csv(dataset: Dataset, path: Path) -> int:
    """Write the consolidated CSV; returns the number of rows written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_COLUMNS)
        for code in sorted(dataset):
            record = dataset[code]
            writer.writerow([_csv_value(record.get(column)) for column in CSV_COLUMNS])
    logger.info("export.csv_written", path=str(path), rows=len(dataset))
    return len(dataset)


def group_by_bank(dataset: Dataset) -> dict[str, Dataset]:
    """Bank code -> that bank's records, each keyed and ordered by IFSC."""
    groups: dict[str, Dataset] = {}
    for code in sorted(dataset):
        groups.setdefault(bank_code(code), {})[code] = dataset[code]
    return groups


def export_json_by_bank(dataset: Dataset, directory: Path) -> int:
    """Write one pretty-printed JSON file per bank; returns the number of files."""
    directory.mkdir(parents=True, exist_ok=True)
    groups = group_by_bank(dataset)
    for bank, records in groups.items():
        with (directory / f"{bank}.json").open("w", encoding="utf-8") as f:
            json.dump(records, f, indent=2, ensure_ascii=False)
    logger.info("export.by_bank_written", directory=str(directory), banks=len(groups))
    return len(groups)


def branch_suffix(code: str) -> Suffix:
    """Last six characters of an IFSC; purely numeric ones become ints to drop leading zeroes."""
    suffix = code.strip()[-BRANCH_SUFFIX_LENGTH:]
    return int(suffix) if suffix.isdigit() else suffix


def build_code_index(codes: Iterable[str]) -> dict[str, list[Suffix]]:
    """Bank code -> branch suffixes, ordered by IFSC."""
    index: dict[str, list[Suffix]] = {}
    for code in sorted(code for code in codes if code):
        index.setdefault(bank_code(code), []).append(branch_suffix(code))
    return index


def export_code_index(codes: Iterable[str], path: Path) -> int:
    """Write IFSC.json; returns the number of banks."""
    index = build_code_index(codes)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(index, f, separators=(",", ":"))
        f.write("\n")
    logger.info("export.code_index_written", path=str(path), banks=len(index))
    return len(index)


def export_json_list(codes: Iterable[str], path: Path) -> int:
    """Write the sorted list of every IFSC; returns its length."""
    listing = sorted(codes)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(listing, f)
    logger.info("export.list_written", path=str(path), codes=len(listing))
    return len(listing)


def export_all(dataset: Dataset, output_dir: Path) -> int:
    """Write every output format; returns the number of records exported."""
    codes = list(dataset)
    export_csv(dataset, output_dir / "IFSC.csv")
    export_json_by_bank(dataset, output_dir / "by-bank")
    export_code_index(codes, output_dir / "IFSC.json")
    export_json_list(codes, output_dir / "IFSC-list.json")
    return len(dataset)
