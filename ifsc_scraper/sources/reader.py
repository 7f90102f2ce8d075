"""Reading numbered CSV chunks of a source sheet."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Collection, Iterable, Iterator, Sequence

import structlog

from ifsc_scraper.core.errors import SourceFormatError

logger = structlog.get_logger(__name__)


def chunk_paths(directory: Path, source: str, chunks: Sequence[int]) -> list[Path]:
    """Paths of ``<source>-<n>.csv`` chunks, in the declared chunk order."""
    return [directory / f"{source}-{chunk}.csv" for chunk in chunks]


def read_csv_chunks(
    paths: Iterable[Path], required_columns: Collection[str] = ()
) -> Iterator[dict[str, str]]:
    """
    Yield one field map per data row across all chunks.

    Every chunk carries its own header row. Blank lines are skipped. Each file
    is closed as soon as its rows are exhausted, or when the consumer closes
    the generator.

    Args:
        paths: Chunk files, read in this order
        required_columns: Columns every chunk header must carry

    Raises:
        SourceFormatError: a chunk is missing, lacks a required column or
            cannot be decoded as CSV
    """
    for path in paths:
        logger.info(f"Parsing #{path.name}", path=str(path))
        try:
            with path.open(encoding="utf-8", newline="") as f:
                reader = csv.DictReader(f)
                if reader.fieldnames is None:
                    raise SourceFormatError(f"{path} has no header row")
                missing = sorted(set(required_columns) - set(reader.fieldnames))
                if missing:
                    raise SourceFormatError(
                        f"{path} is missing required columns: {', '.join(missing)}"
                    )
                for row in reader:
                    if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
                        continue
                    yield row
        except FileNotFoundError as e:
            raise SourceFormatError(f"Missing source chunk: {path}") from e
        except (csv.Error, UnicodeDecodeError) as e:
            raise SourceFormatError(f"Unreadable source chunk {path}: {e}") from e
