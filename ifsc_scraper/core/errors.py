"""Fatal error taxonomy for the pipeline.

Recoverable defects (malformed rows, duplicates, patches aimed at codes that
are not in the dataset) are logged and skipped where they occur. Anything
raised from here aborts the run; the CLI turns it into a non-zero exit.
"""

from __future__ import annotations

from typing import Iterable, Optional


class PipelineError(Exception):
    """Base class for errors that abort a pipeline run."""

    hint: Optional[str] = None


class IdentifierError(PipelineError):
    """An identifier is malformed in a way that cannot be repaired safely."""

    def __init__(self, raw: str, message: str):
        super().__init__(f"{message}: {raw!r}")
        self.raw = raw


class SourceFormatError(PipelineError):
    """A source file is missing or structurally unreadable."""


class FetchError(PipelineError):
    """A remote resource needed by the run could not be fetched."""


class PatchError(PipelineError):
    """A patch document is invalid (unknown action, missing required keys)."""

    def __init__(self, message: str, source: Optional[str] = None):
        if source:
            message = f"{source}: {message}"
        super().__init__(message)
        self.source = source


class SwiftValidationError(PipelineError):
    """Published BICs are not covered by the SWIFT patch."""

    def __init__(self, missing: Iterable[str], hint: Optional[str] = None):
        self.missing = sorted(missing)
        self.hint = hint
        super().__init__(f"{len(self.missing)} published BIC(s) missing from patch")
