"""Patch document models."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator


class PatchAction(str, Enum):
    """Actions a patch document can request."""

    PATCH = "patch"  # merge one payload into a list of codes
    PATCH_MULTIPLE = "patch_multiple"  # code -> payload
    ADD_MULTIPLE = "add_multiple"  # code -> full record
    PATCH_BANK = "patch_bank"  # merge one payload into every code of a bank
    DELETE = "delete"  # remove a list of codes


# Keys each action cannot do without
REQUIRED_KEYS: dict[PatchAction, tuple[str, ...]] = {
    PatchAction.PATCH: ("ifsc", "patch"),
    PatchAction.PATCH_MULTIPLE: ("ifsc",),
    PatchAction.ADD_MULTIPLE: ("ifsc",),
    PatchAction.PATCH_BANK: ("banks", "patch"),
    PatchAction.DELETE: ("ifsc",),
}

# Actions whose ``ifsc`` key is a code -> payload mapping rather than a list
MAPPING_ACTIONS = frozenset({PatchAction.PATCH_MULTIPLE, PatchAction.ADD_MULTIPLE})


class PatchDocument(BaseModel):
    """One IFSC patch file."""

    action: PatchAction = Field(..., description="What the document does")
    ifsc: Optional[Union[list[str], dict[str, dict[str, Any]]]] = Field(
        default=None, description="Target codes, or code -> payload"
    )
    banks: Optional[list[str]] = Field(default=None, description="Target bank codes")
    patch: Optional[dict[str, Any]] = Field(default=None, description="Payload to merge")
    source: Optional[str] = Field(default=None, description="File the document came from")

    @field_validator("action", mode="before")
    @classmethod
    def _lowercase_action(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @model_validator(mode="after")
    def _check_required_keys(self) -> "PatchDocument":
        missing = [key for key in REQUIRED_KEYS[self.action] if getattr(self, key) is None]
        if missing:
            raise ValueError(f"action '{self.action.value}' requires {', '.join(missing)}")

        wants_mapping = self.action in MAPPING_ACTIONS
        if wants_mapping and not isinstance(self.ifsc, dict):
            raise ValueError(f"action '{self.action.value}' requires 'ifsc' to be a mapping")
        if self.ifsc is not None and not wants_mapping and not isinstance(self.ifsc, list):
            raise ValueError(f"action '{self.action.value}' requires 'ifsc' to be a list")
        return self


class BankPatchDocument(BaseModel):
    """One bank table patch file: the same payload for a list of bank codes."""

    banks: list[str] = Field(..., description="Bank codes to patch")
    patch: dict[str, Any] = Field(..., description="Fields to set on each bank entry")
    source: Optional[str] = Field(default=None, description="File the document came from")
