import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import ifsc_scraper` works when running pytest from root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ifsc_scraper.core.config import Settings  # noqa: E402
from ifsc_scraper.normalization.models import BankEntry  # noqa: E402
from tests.helpers import NEFT_HEADER, RTGS_HEADER, write_csv, write_json, write_yaml  # noqa: E402


@pytest.fixture
def banks() -> dict[str, BankEntry]:
    """Bank capability table with one UPI bank and one non-UPI bank."""
    return {
        "SBIN": BankEntry(code="SBIN", ifsc="SBIN0000001", upi=True),
        "HDFC": BankEntry(code="HDFC", ifsc="HDFC0000001", upi=False),
        "ABCD": BankEntry(code="ABCD", ifsc=None, upi=True),
    }


@pytest.fixture
def bank_names() -> dict[str, str]:
    return {
        "SBIN": "State Bank of India",
        "HDFC": "HDFC Bank",
        "ABCD": "Example Co-operative Bank",
    }


@pytest.fixture
def workspace(tmp_path: Path, bank_names: dict[str, str]) -> Path:
    """A complete input tree: bank tables, two chunks per sheet, patches."""
    src = tmp_path / "src"
    write_json(src / "banknames.json", bank_names)
    write_json(
        src / "banks.json",
        {
            "SBIN": {"ifsc": "SBIN0000001", "upi": True},
            "HDFC": {"ifsc": "HDFC0000001", "upi": False},
            "ABCD": {"upi": False},
        },
    )

    sheets = tmp_path / "sheets"
    write_csv(
        sheets / "NEFT-0.csv",
        NEFT_HEADER,
        [
            ["State Bank of India", "SBIN0001234", "560002003", "MG Road", "1 MG Road", "080", "22223333", "BANGALORE", "BANGALORE URBAN", "NA"],
            ["HDFC Bank", "hdfc0000002", "400240002", "Fort", "Fort, Mumbai", "", "9876543210", "MUMBAI", "MUMBAI", "MAHARASHTRA"],
        ],
    )
    write_csv(
        sheets / "NEFT-1.csv",
        NEFT_HEADER,
        [
            # duplicate across chunks, first one wins
            ["State Bank of India", "SBIN0001234", "", "Other", "Elsewhere", "", "", "X", "X", "X"],
        ],
    )
    write_csv(
        sheets / "RTGS-1.csv",
        RTGS_HEADER,
        [
            ["STATE BANK OF INDIA", "SBIN0001234", "560002003", "MG Road", "1 MG Road", "Bangalore", "Bangalore", "KARNATAKA", "080", "22223333"],
            ["BANK NAME", "IFSC_CODE", "MICR_CODE", "BRANCH", "ADDRESS", "CITY1", "CITY2", "STATE", "STD CODE", "PHONE"],
        ],
    )
    write_csv(
        sheets / "RTGS-2.csv",
        RTGS_HEADER,
        [
            ["HDFC Bank", "HDFC0000003", "", "Pune Camp", "Camp", "Pune", "Pune", "MAHARASHTRA", "020", "26123456"],
        ],
    )

    patches = src / "patches"
    write_yaml(
        patches / "ifsc" / "sbi-swift.yml",
        {"action": "patch_multiple", "ifsc": {"SBIN0001234": {"SWIFT": "SBININBB123"}}},
    )
    write_yaml(
        patches / "ifsc" / "zz-delete.yml",
        {"action": "delete", "ifsc": ["HDFC0000003"]},
    )
    write_yaml(
        patches / "banks" / "upi.yml",
        {"banks": ["HDFC"], "patch": {"upi": True}},
    )
    return tmp_path


@pytest.fixture
def settings(workspace: Path) -> Settings:
    return Settings(
        SHEETS_DIR=workspace / "sheets",
        SOURCE_DIR=workspace / "src",
        PATCHES_DIR=workspace / "src" / "patches",
        OUTPUT_DIR=workspace / "data",
        SWIFT_SOURCE_URL="https://swift.example.test/codes",
    )
