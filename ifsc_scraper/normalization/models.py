"""Data models for normalized branch records and the bank capability table."""

from __future__ import annotations

from typing import Dict, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field

# Explicit "not available" marker. Distinct from None, which means never set.
NOT_AVAILABLE = "NA"

IFSC_LENGTH = 11
BANK_CODE_LENGTH = 4


class BranchRecord(TypedDict, total=False):
    BANK: Optional[str]
    IFSC: str
    BRANCH: Optional[str]
    CENTRE: Optional[str]
    DISTRICT: Optional[str]
    STATE: Optional[str]
    ADDRESS: Optional[str]
    CONTACT: Optional[str]
    CITY: Optional[str]
    NEFT: bool
    RTGS: bool
    IMPS: bool
    UPI: bool
    MICR: Optional[str]
    SWIFT: Optional[str]


# IFSC -> record
Dataset = Dict[str, BranchRecord]


def is_available(value: object) -> bool:
    """True when a field carries a real value (neither unset nor the NA sentinel)."""
    return value is not None and value != NOT_AVAILABLE


def bank_code(ifsc: str) -> str:
    """Owning bank of an identifier: its first four characters."""
    return ifsc[:BANK_CODE_LENGTH]


class BankEntry(BaseModel):
    """One row of the bank capability table (banks.json)."""

    model_config = ConfigDict(extra="allow")

    code: str = Field(..., description="4-character bank code")
    name: Optional[str] = Field(default=None, description="Display name, if known")
    ifsc: Optional[str] = Field(default=None, description="Head office / IMPS IFSC")
    upi: bool = Field(default=False, description="Bank is live on UPI")
