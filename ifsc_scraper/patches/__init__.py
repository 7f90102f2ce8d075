"""Patch documents and the engine that applies them."""

from ifsc_scraper.patches.models import (
    BankPatchDocument,
    PatchAction,
    PatchDocument,
)
from ifsc_scraper.patches.loader import (
    load_bank_patch_documents,
    load_patch_document,
    load_patch_documents,
    patch_files,
    read_patch_file,
)
from ifsc_scraper.patches.engine import (
    PatchEngine,
    PatchStats,
    apply_bank_patches,
    apply_patches,
)

__all__ = [
    # Models
    "BankPatchDocument",
    "PatchAction",
    "PatchDocument",
    # Loading
    "load_bank_patch_documents",
    "load_patch_document",
    "load_patch_documents",
    "patch_files",
    "read_patch_file",
    # Engine
    "PatchEngine",
    "PatchStats",
    "apply_bank_patches",
    "apply_patches",
]
