"""Bank level lookup tables: display names, UPI capability, known states.

banknames.json maps bank code -> display name:
  {"SBIN": "State Bank of India", ...}

banks.json maps bank code -> capability entry:
  {"SBIN": {"code": "SBIN", "ifsc": "SBIN0000001", "upi": true, ...}, ...}
  The "code" key may be omitted; it defaults to the mapping key.

KNOWN_STATES is not the full list of states and union territories. It is only
used to sanity check rows whose columns were realigned.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from pydantic import ValidationError

from ifsc_scraper.core.errors import SourceFormatError
from ifsc_scraper.normalization.models import BankEntry, bank_code

KNOWN_STATES = frozenset(
    {
        "ANDHRA PRADESH",
        "DELHI",
        "GUJARAT",
        "JAMMU AND KASHMIR",
        "HIMACHAL PRADESH",
        "KARNATAKA",
        "KERALA",
        "MAHARASHTRA",
        "PUNJAB",
        "TAMIL NADU",
        "MADHYA PRADESH",
        "UTTARAKHAND",
        "RAJASTHAN",
        "TELANGANA",
        "WEST BENGAL",
    }
)


def _read_json(path: Path) -> dict:
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise SourceFormatError(f"Missing input file: {path}") from e
    except json.JSONDecodeError as e:
        raise SourceFormatError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise SourceFormatError(f"Expected a JSON object in {path}")
    return data


def load_bank_names(path: Path) -> dict[str, str]:
    """Load the bank code -> display name table."""
    return {str(code): str(name) for code, name in _read_json(path).items()}


def load_banks(path: Path) -> dict[str, BankEntry]:
    """Load the bank capability table keyed by bank code."""
    banks: dict[str, BankEntry] = {}
    for code, entry in _read_json(path).items():
        if not isinstance(entry, dict):
            raise SourceFormatError(f"Invalid bank entry {code} in {path}: expected an object")
        try:
            banks[code] = BankEntry.model_validate({"code": code, **entry})
        except ValidationError as e:
            raise SourceFormatError(f"Invalid bank entry {code} in {path}: {e}") from e
    return banks


def has_upi(banks: Mapping[str, BankEntry], ifsc: str) -> bool:
    """Whether the bank owning ``ifsc`` is marked UPI capable."""
    entry = banks.get(bank_code(ifsc))
    return bool(entry and entry.upi)
