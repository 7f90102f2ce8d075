"""Normalization of raw branch rows: identifiers, contacts, free text."""

from ifsc_scraper.normalization.models import (
    NOT_AVAILABLE,
    BankEntry,
    BranchRecord,
    Dataset,
    bank_code,
    is_available,
)
from ifsc_scraper.normalization.normalizer import (
    FIELD_CLEANERS,
    extract_micr,
    normalize_contact,
    normalize_identifier,
    sanitize_text,
)
from ifsc_scraper.normalization.banks import (
    KNOWN_STATES,
    has_upi,
    load_bank_names,
    load_banks,
)

__all__ = [
    # Models
    "NOT_AVAILABLE",
    "BankEntry",
    "BranchRecord",
    "Dataset",
    "bank_code",
    "is_available",
    # Functions
    "FIELD_CLEANERS",
    "extract_micr",
    "normalize_contact",
    "normalize_identifier",
    "sanitize_text",
    # Bank tables
    "KNOWN_STATES",
    "has_upi",
    "load_bank_names",
    "load_banks",
]
