"""Field-level merge of the per-source datasets."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

import structlog

from ifsc_scraper.merging.config import MergePolicy
from ifsc_scraper.normalization.models import (
    NOT_AVAILABLE,
    BranchRecord,
    Dataset,
    is_available,
)

logger = structlog.get_logger(__name__)


def resolve_field(values: Sequence[Any]) -> Any:
    """
    Pick the value for one field from candidates ordered by precedence.

    Returns the first available value; otherwise "NA" if any candidate carried
    the sentinel, otherwise None.
    """
    for value in values:
        if is_available(value):
            return value
    if NOT_AVAILABLE in values:
        return NOT_AVAILABLE
    return None


def merge_records(
    records: Sequence[Optional[Mapping[str, Any]]],
    policy: MergePolicy,
) -> BranchRecord:
    """
    Merge one identifier's records, given in precedence order.

    Args:
        records: Record from each source (None where the source lacks it)
        policy: Merge policy

    Returns:
        The combined record
    """
    present = [record for record in records if record]

    fields: list[str] = []
    for record in present:
        for key in record:
            if key not in fields:
                fields.append(key)

    combined: dict[str, Any] = {}
    for key in fields:
        combined[key] = resolve_field([record[key] for record in present if key in record])

    for flag, default in policy.flag_defaults.items():
        if combined.get(flag) is None:
            combined[flag] = default
    for key in policy.null_fields:
        combined.setdefault(key, None)
    for key in policy.reset_fields:
        combined[key] = None
    for key in policy.dropped_fields:
        combined.pop(key, None)

    return combined  # type: ignore[return-value]


def merge_datasets(
    sources: Mapping[str, Dataset],
    policy: MergePolicy | None = None,
) -> Dataset:
    """
    Merge per-source datasets into one authoritative dataset.

    Args:
        sources: Source name -> dataset. Every source named in the policy
            precedence must be present (an empty dataset is fine).
        policy: Merge policy (defaults to NEFT > RTGS > IMPS)

    Returns:
        Dataset covering the union of identifiers from all sources

    Raises:
        ValueError: a source is missing from the policy or vice versa
    """
    policy = policy or MergePolicy()
    policy.validate_policy()

    unknown = set(sources) - set(policy.precedence)
    missing = set(policy.precedence) - set(sources)
    if unknown or missing:
        raise ValueError(
            f"Sources {sorted(sources)} do not match merge precedence {policy.precedence}"
        )

    ordered = [sources[name] for name in policy.precedence]

    identifiers: set[str] = set()
    for dataset in ordered:
        identifiers.update(dataset)

    merged: Dataset = {}
    overlapping = 0
    for ifsc in sorted(identifiers):
        records = [dataset.get(ifsc) for dataset in ordered]
        if sum(1 for record in records if record) > 1:
            overlapping += 1
        merged[ifsc] = merge_records(records, policy)

    logger.info(
        "merge.completed",
        records=len(merged),
        overlapping=overlapping,
        **{f"{name.lower()}_records": len(sources[name]) for name in policy.precedence},
    )
    return merged
