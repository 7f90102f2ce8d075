"""SWIFT/BIC coverage check for SBI.

SBI publishes its SWIFT codes at https://sbi.co.in/web/nri/quick-links/swift-codes.
Every BIC on that page must appear in the SWIFT patch, otherwise the exported
data silently lacks international routing for those branches. A gap is fatal.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

import httpx
import lxml.html
import structlog
from lxml.etree import ParserError

from ifsc_scraper.core.config import Settings, get_settings
from ifsc_scraper.core.errors import (
    FetchError,
    PatchError,
    SourceFormatError,
    SwiftValidationError,
)
from ifsc_scraper.patches.loader import load_patch_document
from ifsc_scraper.patches.models import PatchDocument

logger = structlog.get_logger(__name__)

BRANCH_LOCATOR_URL = "https://www.sbi.co.in/web/home/locator/branch"
# Column of the published table that holds the BIC
BIC_COLUMN = 2

_WHITESPACE = re.compile(r"\s+")


def extract_bics(html: str) -> set[str]:
    """BICs from the first table body of the published page."""
    try:
        document = lxml.html.fromstring(html)
    except ParserError as e:
        raise SourceFormatError(f"Unparseable SWIFT page: {e}") from e

    bodies = document.xpath("//tbody")
    if not bodies:
        raise SourceFormatError("SWIFT page has no table body")

    bics: set[str] = set()
    for row in bodies[0].xpath("./tr"):
        cells = row.xpath("./td")
        if len(cells) <= BIC_COLUMN:
            continue
        bic = _WHITESPACE.sub("", cells[BIC_COLUMN].text_content())
        if bic:
            bics.add(bic)
    return bics


def patch_bics(document: PatchDocument) -> set[str]:
    """SWIFT values declared by a code -> payload patch document."""
    if not isinstance(document.ifsc, dict):
        raise SourceFormatError(f"{document.source}: SWIFT patch must map IFSC codes to payloads")
    return {
        payload["SWIFT"]
        for payload in document.ifsc.values()
        if payload.get("SWIFT")
    }


class SwiftValidator:
    """Compares the published SBI BIC list with the SWIFT patch."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the validator.

        Args:
            settings: Pipeline settings (defaults to loaded settings)
            client: HTTP client to use; one is created per fetch if omitted
        """
        self.settings = settings or get_settings()
        self.client = client

    @property
    def patch_path(self) -> Path:
        return self.settings.ifsc_patches_dir / self.settings.SWIFT_PATCH_FILE

    def fetch_published_bics(self) -> set[str]:
        """Download and parse the published BIC list."""
        url = self.settings.SWIFT_SOURCE_URL
        logger.info("swift.fetching", url=url)
        try:
            if self.client is not None:
                response = self.client.get(url)
            else:
                with httpx.Client(
                    timeout=self.settings.HTTP_TIMEOUT_SECONDS, follow_redirects=True
                ) as client:
                    response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise FetchError(f"Could not fetch SWIFT codes from {url}: {e}") from e
        return extract_bics(response.text)

    def validate(self) -> set[str]:
        """
        Check that every published BIC is covered by the patch.

        Returns:
            The published BICs

        Raises:
            SwiftValidationError: some published BICs are missing from the patch
            FetchError: the page could not be downloaded
            PatchError: the SWIFT patch is missing or invalid
        """
        try:
            document = load_patch_document(self.patch_path)
        except PatchError as e:
            e.hint = f"Create {self.patch_path} covering every BIC at {self.settings.SWIFT_SOURCE_URL}"
            raise
        covered = patch_bics(document)
        website_bics = self.fetch_published_bics()

        missing = website_bics - covered
        if missing:
            hint = (
                f"Please match {self.settings.SWIFT_SOURCE_URL} "
                f"to {self.patch_path}"
            )
            logger.critical(f"[SBI] Missing SWIFT/BICs for SBI. {hint}")
            logger.info(
                f"[SBI] You can use {BRANCH_LOCATOR_URL} to find IFSC from BRANCH code "
                "or guess it as SBIN00+BRANCH_CODE"
            )
            logger.debug(f"[SBI] Count of Missing BICS: {len(missing)}")
            logger.debug("[SBI] Missing BICS follow")
            logger.debug(", ".join(sorted(missing)))
            raise SwiftValidationError(missing, hint=hint)

        logger.info("swift.validated", published=len(website_bics), covered=len(covered))
        return website_bics
