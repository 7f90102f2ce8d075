"""Core normalization functions for identifiers, contacts and free text."""

from __future__ import annotations

import re
from typing import Callable, Iterable, Optional

import structlog

from ifsc_scraper.core.errors import IdentifierError
from ifsc_scraper.normalization.models import IFSC_LENGTH, NOT_AVAILABLE

logger = structlog.get_logger(__name__)


# ============================================================================
# Identifier Normalization
# ============================================================================

DEFAULT_INVALID_IDENTIFIERS = ("IFSC_CODE", "BANK OF BARODA", "KPK HYDERABAD")

_NON_ALPHANUMERIC = re.compile(r"[^0-9A-Za-z]")
# 4 letter bank code, a reserved zero, 6 character branch code
_IFSC_PATTERN = re.compile(r"^[A-Z]{4}0[A-Z0-9]{6}$")


def _strip_identifier(raw: str) -> str:
    return _NON_ALPHANUMERIC.sub("", raw.upper())


def normalize_identifier(
    raw: str | None,
    invalid_identifiers: Iterable[str] = DEFAULT_INVALID_IDENTIFIERS,
) -> str | None:
    """
    Canonicalize a raw IFSC value.

    - " sbin0 001234 " -> "SBIN0001234"
    - "SBIN0001234XYZ" -> "SBIN0001234" (truncated, logged)
    - "IFSC_CODE"      -> None (repeated header row)

    Args:
        raw: Value from the IFSC column
        invalid_identifiers: Known non-identifier tokens to drop

    Returns:
        The 11 character identifier, or None if the row should be dropped

    Raises:
        IdentifierError: the value is oversized and its first 11 characters
            are not a plausible IFSC, so truncating would invent a code
    """
    if raw is None:
        return None

    code = _strip_identifier(str(raw))
    if not code:
        return None

    if code in {_strip_identifier(token) for token in invalid_identifiers}:
        logger.debug("identifier.sentinel_dropped", raw=raw)
        return None

    if len(code) > IFSC_LENGTH:
        truncated = code[:IFSC_LENGTH]
        if not _IFSC_PATTERN.match(truncated):
            raise IdentifierError(raw, "IFSC code too long to truncate safely")
        logger.warning(
            f"IFSC code longer than {IFSC_LENGTH} characters: {raw}, using {truncated}",
            original=raw,
            ifsc=truncated,
        )
        return truncated

    if len(code) < IFSC_LENGTH:
        logger.warning("identifier.too_short", raw=raw, normalized=code)
        return None

    return code


# ============================================================================
# Contact Normalization
# ============================================================================

COUNTRY_CODE = "+91"
# Anything longer than this without an area code is treated as a mobile number
MAX_LOCAL_NUMBER_DIGITS = 9

_LEADING_DIGITS = re.compile(r"^(\d+)\D?")
_PHONE_NOISE = re.compile(r"[\s-]")


def leading_digits(value: object) -> str | None:
    """Leading run of digits after dropping whitespace and hyphens; a lone "0" counts as absent."""
    if value is None:
        return None
    match = _LEADING_DIGITS.match(_PHONE_NOISE.sub("", str(value)))
    if not match or match.group(1) == "0":
        return None
    return match.group(1)


def normalize_contact(area_code: object, number: object) -> str | None:
    """
    Combine a local number and an STD code into an E.164-style contact.

    - ("022", "12345678")  -> "+912212345678"
    - (None, "9876543210") -> "+919876543210"
    - (None, "2345678")    -> "2345678" (no dialing context, left as-is)
    - (None, None)         -> None

    Args:
        area_code: STD code column (may carry spaces, hyphens, trailing notes)
        number: Phone column

    Returns:
        Contact string or None
    """
    contact = leading_digits(number)
    std_code = leading_digits(area_code)

    if contact is None:
        return None

    if std_code and std_code.startswith("0"):
        std_code = std_code[1:]

    if std_code:
        return f"{COUNTRY_CODE}{std_code}{contact}"
    if len(contact) > MAX_LOCAL_NUMBER_DIGITS:
        return f"{COUNTRY_CODE}{contact}"
    return contact


# ============================================================================
# Text Sanitization
# ============================================================================

_WHITESPACE = re.compile(r"\s+")
_DANGLING_SEPARATORS = re.compile(r"^[\s,.\-]+|[\s,.\-]+$")


def _strip_dangling_separators(value: str) -> str:
    return _DANGLING_SEPARATORS.sub("", value)


def _upper(value: str) -> str:
    return value.upper()


# Per-field cleanup rules, applied in order after whitespace collapsing.
# Every rule must be idempotent.
FIELD_CLEANERS: dict[str, list[Callable[[str], str]]] = {
    "ADDRESS": [_strip_dangling_separators],
    "CITY": [_upper],
    "CENTRE": [_upper],
    "DISTRICT": [_upper],
    "STATE": [_upper],
}


def sanitize_text(value: object, field: Optional[str] = None) -> str:
    """Trim, collapse whitespace and apply the cleaners for ``field``; blank becomes NA."""
    if value is None:
        return NOT_AVAILABLE

    cleaned = _WHITESPACE.sub(" ", str(value)).strip()
    for cleaner in FIELD_CLEANERS.get(field or "", []):
        cleaned = cleaner(cleaned)

    return cleaned or NOT_AVAILABLE


# ============================================================================
# MICR
# ============================================================================

_MICR_PATTERN = re.compile(r"\d{9}")


def extract_micr(value: object) -> str | None:
    """First 9 digit run of a MICR cell, or None."""
    if value is None:
        return None
    match = _MICR_PATTERN.search(str(value).strip())
    return match.group(0) if match else None
