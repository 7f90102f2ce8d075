from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Pipeline settings loaded from environment variables and .env file.

    This uses pydantic-settings so that we get type validation and defaults.
    Paths are relative to the working directory the pipeline is run from.
    """

    # App basics
    ENV: Literal["development", "staging", "production"] = "development"
    """Environment mode: affects log rendering."""

    DEBUG: bool = False
    """Enable debug mode: DEBUG level log lines are emitted."""

    # Inputs
    SHEETS_DIR: Path = Path("sheets")
    """Directory holding the NEFT-<n>.csv and RTGS-<n>.csv chunks."""

    SOURCE_DIR: Path = Path("src")
    """Directory holding banknames.json and banks.json."""

    PATCHES_DIR: Path = Path("src/patches")
    """Root of the patch tree; IFSC patches in ifsc/, bank table patches in banks/."""

    NEFT_CHUNKS: list[int] = [0, 1]
    """NEFT chunk numbers, parsed in this order."""

    RTGS_CHUNKS: list[int] = [1, 2]
    """RTGS chunk numbers, parsed in this order."""

    INVALID_IDENTIFIERS: list[str] = ["IFSC_CODE", "BANK OF BARODA", "KPK HYDERABAD"]
    """Values seen in the IFSC column that are not identifiers (repeated headers, garbage)."""

    # Outputs
    OUTPUT_DIR: Path = Path("data")
    """Directory receiving IFSC.csv, IFSC.json, IFSC-list.json and by-bank/."""

    # SWIFT validation
    SWIFT_SOURCE_URL: str = "https://sbi.co.in/web/nri/quick-links/swift-codes"
    """Published SBI SWIFT/BIC list."""

    SWIFT_PATCH_FILE: str = "sbi-swift.yml"
    """Patch document (under PATCHES_DIR/ifsc) that must cover every published BIC."""

    HTTP_TIMEOUT_SECONDS: float = 30.0
    """Timeout for the SWIFT page fetch."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def ifsc_patches_dir(self) -> Path:
        return self.PATCHES_DIR / "ifsc"

    @property
    def bank_patches_dir(self) -> Path:
        return self.PATCHES_DIR / "banks"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance to avoid re-parsing .env repeatedly."""
    return Settings()
