"""Patch engine: applies patch documents to a merged dataset in order.

Every action is safe to repeat. The same patch set is applied to a freshly
merged dataset on every run, and applying a document twice leaves the dataset
as applying it once.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, MutableMapping, cast

import structlog
from pydantic import ValidationError

from ifsc_scraper.core.errors import PatchError
from ifsc_scraper.normalization.models import BankEntry, Dataset, bank_code
from ifsc_scraper.patches.models import BankPatchDocument, PatchAction, PatchDocument

logger = structlog.get_logger(__name__)


@dataclass
class PatchStats:
    """Counters across all documents applied by one engine."""

    documents: int = 0
    patched: int = 0
    added: int = 0
    deleted: int = 0
    missing: int = 0


class PatchEngine:
    """
    Applies IFSC patch documents to a dataset in place.

    Payload fields always overwrite existing values. Codes that are not in the
    dataset are skipped with an info log; patches are written ahead of the
    data they target.
    """

    def __init__(self, dataset: Dataset):
        """
        Initialize the engine.

        Args:
            dataset: Merged dataset, mutated in place
        """
        self.dataset = dataset
        self.stats = PatchStats()
        self._handlers: dict[PatchAction, Callable[[PatchDocument], None]] = {
            PatchAction.PATCH: self._patch,
            PatchAction.PATCH_MULTIPLE: self._patch_multiple,
            PatchAction.ADD_MULTIPLE: self._add_multiple,
            PatchAction.PATCH_BANK: self._patch_bank,
            PatchAction.DELETE: self._delete,
        }

    def apply(self, document: PatchDocument) -> None:
        """Apply a single document."""
        handler = self._handlers.get(document.action)
        if handler is None:
            raise PatchError(f"unsupported action '{document.action}'", source=document.source)

        logger.debug(f"Applying {document.source}", action=document.action.value)
        handler(document)
        self.stats.documents += 1

    def apply_all(self, documents: Iterable[PatchDocument]) -> Dataset:
        """Apply documents in the given order and return the dataset."""
        for document in documents:
            self.apply(document)
        logger.info(
            "patches.applied",
            documents=self.stats.documents,
            patched=self.stats.patched,
            added=self.stats.added,
            deleted=self.stats.deleted,
            missing=self.stats.missing,
        )
        return self.dataset

    def _merge_into(self, code: str, payload: Mapping[str, Any], source: str | None) -> None:
        record = self.dataset.get(code)
        if record is None:
            self.stats.missing += 1
            logger.info(f"{code} not found in the dataset while applying patch", patch=source)
            return
        logger.debug(f"Patching {code}", patch=source)
        record.update(copy.deepcopy(dict(payload)))  # type: ignore[typeddict-item]
        self.stats.patched += 1

    def _patch(self, document: PatchDocument) -> None:
        patch = cast(dict, document.patch)
        for code in cast(list, document.ifsc):
            self._merge_into(code, patch, document.source)

    def _patch_multiple(self, document: PatchDocument) -> None:
        for code, payload in cast(dict, document.ifsc).items():
            self._merge_into(code, payload, document.source)

    def _add_multiple(self, document: PatchDocument) -> None:
        for code, record in cast(dict, document.ifsc).items():
            logger.debug(f"Adding {code}", patch=document.source)
            added = copy.deepcopy(record)
            added["IFSC"] = code
            self.dataset[code] = added  # type: ignore[assignment]
            self.stats.added += 1

    def _patch_bank(self, document: PatchDocument) -> None:
        targets = set(cast(list, document.banks))
        patch = cast(dict, document.patch)
        for code in list(self.dataset):
            if bank_code(code) in targets:
                self.dataset[code].update(copy.deepcopy(patch))  # type: ignore[typeddict-item]
                self.stats.patched += 1
        logger.info("patches.bank_patched", banks=sorted(targets), patch=document.source)

    def _delete(self, document: PatchDocument) -> None:
        for code in cast(list, document.ifsc):
            if self.dataset.pop(code, None) is not None:
                self.stats.deleted += 1
                logger.info(f"Removed {code} from the list", patch=document.source)
            else:
                logger.info(f"{code} already absent, nothing to remove", patch=document.source)


def apply_patches(dataset: Dataset, documents: Iterable[PatchDocument]) -> Dataset:
    """Apply IFSC patch documents to ``dataset`` in order."""
    return PatchEngine(dataset).apply_all(documents)


def apply_bank_patches(
    banks: MutableMapping[str, BankEntry],
    documents: Iterable[BankPatchDocument],
) -> MutableMapping[str, BankEntry]:
    """
    Apply bank table patches in order.

    Each payload is merged into the entry of every listed bank code. Unknown
    codes are skipped with an info log.

    Raises:
        PatchError: the patched entry no longer validates
    """
    for document in documents:
        for code in document.banks:
            entry = banks.get(code)
            if entry is None:
                logger.info(
                    f"{code} not found in the list of ACH banks while applying patch",
                    patch=document.source,
                )
                continue
            try:
                banks[code] = BankEntry.model_validate({**entry.model_dump(), **document.patch})
            except ValidationError as e:
                raise PatchError(f"patch leaves bank {code} invalid: {e}", source=document.source) from e
    return banks
