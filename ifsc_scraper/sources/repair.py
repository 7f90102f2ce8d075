"""Column realignment for malformed RTGS rows.

Some RTGS rows are missing their ADDRESS cell, so every column after BRANCH
sits one position to the left:

    column     | expected    | shifted row holds
    -----------+-------------+------------------
    ADDRESS    | address     | centre (CITY1)
    CITY1      | centre      | city (CITY2)
    CITY2      | city        | state
    STATE      | state       | STD code
    STD CODE   | STD code    | phone
    PHONE      | phone       | (empty)

The tell is a STATE value containing digits. Realignment moves each value back
to the column it belongs to; the lost address is left unset.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional

import structlog

from ifsc_scraper.normalization.banks import KNOWN_STATES
from ifsc_scraper.normalization.normalizer import sanitize_text

logger = structlog.get_logger(__name__)

# (target column, column its value is currently in)
RTGS_SHIFT_MAPPING: tuple[tuple[str, Optional[str]], ...] = (
    ("PHONE", "STD CODE"),
    ("STD CODE", "STATE"),
    ("STATE", "CITY2"),
    ("CITY2", "CITY1"),
    ("CITY1", "ADDRESS"),
    ("ADDRESS", None),
)

_DIGIT = re.compile(r"\d")


def needs_rtgs_realignment(row: Mapping[str, Optional[str]]) -> bool:
    """A STATE cell containing a digit means the row is shifted."""
    return bool(_DIGIT.search(str(row.get("STATE") or "").strip()))


def fix_rtgs_row_alignment(row: Mapping[str, Optional[str]]) -> dict[str, Optional[str]]:
    """Return a copy of ``row`` with the shifted columns moved back into place."""
    fixed = dict(row)
    for target, source in RTGS_SHIFT_MAPPING:
        fixed[target] = row.get(source) if source else None

    state = sanitize_text(fixed["STATE"], "STATE")
    logger.warning(
        "rtgs.row_realigned",
        ifsc=row.get("IFSC"),
        original_state=row.get("STATE"),
        state=state,
    )
    if state not in KNOWN_STATES:
        logger.warning("rtgs.unknown_state_after_realignment", ifsc=row.get("IFSC"), state=state)
    return fixed
