"""Merge policy for combining the per-source datasets.

Field resolution:
-----------------
For every field, sources are consulted in ``precedence`` order. The first one
holding a real value (not None, not "NA") wins. A record can therefore take
its ADDRESS from NEFT and its CENTRE from RTGS.

After resolution:
- capability flags still unset take ``flag_defaults`` (IMPS is assumed
  available everywhere until NPCI says otherwise)
- ``null_fields`` that are still unset are written as None
- ``reset_fields`` are always written as None; they are only ever set by patches
- ``dropped_fields`` are removed
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class MergePolicy(BaseModel):
    """Source precedence and post-merge defaults."""

    precedence: list[str] = Field(
        default_factory=lambda: ["NEFT", "RTGS", "IMPS"],
        description="Source names, highest precedence first",
    )
    flag_defaults: dict[str, bool] = Field(
        default_factory=lambda: {
            "NEFT": False,
            "RTGS": False,
            "IMPS": True,
            "UPI": False,
        },
        description="Default for each capability flag no source has set",
    )
    null_fields: list[str] = Field(
        default_factory=lambda: ["MICR"],
        description="Fields written as None when no source set them",
    )
    reset_fields: list[str] = Field(
        default_factory=lambda: ["SWIFT"],
        description="Fields always written as None after merging",
    )
    dropped_fields: list[str] = Field(
        default_factory=lambda: ["DATE"],
        description="Fields removed from merged records",
    )

    def validate_policy(self) -> None:
        """Ensure the policy is usable.

        Raises ValueError if precedence is empty or names a source twice.
        """
        if not self.precedence:
            raise ValueError("Merge precedence must name at least one source")
        if len(set(self.precedence)) != len(self.precedence):
            raise ValueError(f"Merge precedence repeats a source: {self.precedence}")
