"""
Pipeline orchestration.

Runs every stage once, in order, to completion:
bank tables -> bank patches -> NEFT/RTGS/IMPS parsing -> merge -> IFSC patches
-> exports. Any PipelineError aborts the run.
"""

from __future__ import annotations

from typing import Iterator, Optional

import structlog

from ifsc_scraper.core.config import Settings, get_settings
from ifsc_scraper.core.errors import PipelineError
from ifsc_scraper.exports.exporter import export_all
from ifsc_scraper.merging.config import MergePolicy
from ifsc_scraper.merging.merger import merge_datasets
from ifsc_scraper.metrics import RunStatus, RunSummary
from ifsc_scraper.normalization.banks import load_bank_names, load_banks
from ifsc_scraper.normalization.models import BankEntry, Dataset
from ifsc_scraper.patches.engine import PatchEngine, apply_bank_patches
from ifsc_scraper.patches.loader import load_bank_patch_documents, load_patch_documents
from ifsc_scraper.sources.base import BaseSourceParser
from ifsc_scraper.sources.imps import ImpsParser, bank_table_rows
from ifsc_scraper.sources.neft import NeftParser
from ifsc_scraper.sources.reader import chunk_paths, read_csv_chunks
from ifsc_scraper.sources.rtgs import RtgsParser

logger = structlog.get_logger(__name__)


class IFSCPipeline:
    """
    Builds the consolidated IFSC dataset from the source sheets.

    The dataset is owned by the pipeline for the length of a run and is
    available as ``dataset`` afterwards.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        policy: Optional[MergePolicy] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            settings: Pipeline settings (defaults to loaded settings)
            policy: Merge policy (defaults to NEFT > RTGS > IMPS)
        """
        self.settings = settings or get_settings()
        self.policy = policy or MergePolicy()
        self.policy.validate_policy()
        self.summary = RunSummary()
        self.dataset: Dataset = {}

    def load_bank_tables(self) -> tuple[dict[str, str], dict[str, BankEntry]]:
        """Load bank names and the capability table, with bank patches applied."""
        source_dir = self.settings.SOURCE_DIR
        bank_names = load_bank_names(source_dir / "banknames.json")
        banks = load_banks(source_dir / "banks.json")

        documents = load_bank_patch_documents(self.settings.bank_patches_dir)
        apply_bank_patches(banks, documents)
        self.summary.bank_patches_applied = len(documents)
        return bank_names, banks

    def _record_stats(self, parser: BaseSourceParser) -> None:
        stats = parser.stats
        self.summary.source_records[stats.source] = stats.records
        self.summary.source_dropped[stats.source] = stats.dropped
        self.summary.source_duplicates[stats.source] = stats.duplicates

    def _read_chunks(self, parser: BaseSourceParser, chunks: list[int]) -> Iterator[dict[str, str]]:
        paths = chunk_paths(self.settings.SHEETS_DIR, parser.source, chunks)
        return read_csv_chunks(paths, parser.required_columns)

    def parse_sources(
        self, bank_names: dict[str, str], banks: dict[str, BankEntry]
    ) -> dict[str, Dataset]:
        """Parse every source into its own dataset."""
        invalid = self.settings.INVALID_IDENTIFIERS

        neft = NeftParser(banks, invalid)
        rtgs = RtgsParser(banks, invalid)
        imps = ImpsParser(banks, invalid)

        datasets = {
            "NEFT": neft.parse(self._read_chunks(neft, self.settings.NEFT_CHUNKS)),
            "RTGS": rtgs.parse(self._read_chunks(rtgs, self.settings.RTGS_CHUNKS)),
            "IMPS": imps.parse(bank_table_rows(banks, bank_names)),
        }
        for parser in (neft, rtgs, imps):
            self._record_stats(parser)
        return datasets

    def run(self, export: bool = True) -> Dataset:
        """
        Execute a full pipeline run.

        Args:
            export: Write the output files

        Returns:
            The final dataset

        Raises:
            PipelineError: a fatal defect aborted the run
        """
        self.summary = RunSummary()
        logger.info("pipeline.started", output_dir=str(self.settings.OUTPUT_DIR))

        try:
            bank_names, banks = self.load_bank_tables()
            sources = self.parse_sources(bank_names, banks)

            self.dataset = merge_datasets(sources, self.policy)
            self.summary.merged_records = len(self.dataset)

            engine = PatchEngine(self.dataset)
            engine.apply_all(load_patch_documents(self.settings.ifsc_patches_dir))
            self.summary.patches_applied = engine.stats.documents

            if export:
                self.summary.records_exported = export_all(self.dataset, self.settings.OUTPUT_DIR)
        except PipelineError as e:
            self.summary.finish(RunStatus.FAILED, error=str(e))
            logger.error("pipeline.failed", error=str(e), error_type=type(e).__name__)
            raise

        self.summary.finish()
        logger.info("pipeline.completed", **self.summary.to_dict())
        return self.dataset
