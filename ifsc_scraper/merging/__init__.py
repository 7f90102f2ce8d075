"""Multi-source merge under a declared precedence policy."""

from ifsc_scraper.merging.config import MergePolicy
from ifsc_scraper.merging.merger import merge_datasets, merge_records, resolve_field

__all__ = [
    "MergePolicy",
    "merge_datasets",
    "merge_records",
    "resolve_field",
]
