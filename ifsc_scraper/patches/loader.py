"""Loading patch documents from a directory.

Documents are applied in lexical filename order. That order is part of the
contract: when two documents touch the same field of the same code, the one
whose filename sorts last wins, and a ``delete`` only removes what exists at
the moment it runs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Type, TypeVar

import structlog
import yaml
from pydantic import BaseModel, ValidationError

from ifsc_scraper.core.errors import PatchError
from ifsc_scraper.patches.models import BankPatchDocument, PatchDocument

logger = structlog.get_logger(__name__)

PATCH_SUFFIXES = (".yml", ".yaml")

DocumentT = TypeVar("DocumentT", bound=BaseModel)


def patch_files(directory: Path) -> list[Path]:
    """Patch files in ``directory``, sorted by filename."""
    if not directory.is_dir():
        logger.warning("patches.directory_missing", directory=str(directory))
        return []
    return sorted(
        (path for path in directory.iterdir() if path.suffix in PATCH_SUFFIXES and path.is_file()),
        key=lambda path: path.name,
    )


def read_patch_file(path: Path) -> dict[str, Any]:
    """Parse one YAML patch file into a mapping."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise PatchError("patch file not found", source=path.name) from e
    except OSError as e:
        raise PatchError(f"unreadable patch file: {e}", source=path.name) from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise PatchError(f"invalid YAML: {e}", source=path.name) from e
    if not isinstance(data, dict):
        raise PatchError("patch document must be a mapping", source=path.name)
    return data


def _load(path: Path, model: Type[DocumentT]) -> DocumentT:
    data = read_patch_file(path)
    try:
        return model.model_validate({**data, "source": path.name})
    except ValidationError as e:
        raise PatchError(str(e), source=path.name) from e


def load_patch_document(path: Path) -> PatchDocument:
    """Load and validate a single IFSC patch document."""
    return _load(path, PatchDocument)


def load_patch_documents(directory: Path) -> list[PatchDocument]:
    """Load every IFSC patch document in ``directory`` in application order."""
    documents = [load_patch_document(path) for path in patch_files(directory)]
    logger.info("patches.loaded", directory=str(directory), count=len(documents))
    return documents


def load_bank_patch_documents(directory: Path) -> list[BankPatchDocument]:
    """Load every bank table patch document in ``directory`` in application order."""
    documents = [_load(path, BankPatchDocument) for path in patch_files(directory)]
    logger.info("patches.bank_loaded", directory=str(directory), count=len(documents))
    return documents
