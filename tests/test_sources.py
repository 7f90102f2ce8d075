"""Tests for the CSV reader, column repair and the source parsers."""

import pytest
from structlog.testing import capture_logs

from ifsc_scraper.core.errors import IdentifierError, SourceFormatError
from ifsc_scraper.normalization.models import NOT_AVAILABLE
from ifsc_scraper.sources.imps import ImpsParser, bank_table_rows
from ifsc_scraper.sources.neft import NeftParser
from ifsc_scraper.sources.reader import chunk_paths, read_csv_chunks
from ifsc_scraper.sources.repair import (
    RTGS_SHIFT_MAPPING,
    fix_rtgs_row_alignment,
    needs_rtgs_realignment,
)
from ifsc_scraper.sources.rtgs import RtgsParser
from tests.helpers import NEFT_HEADER, neft_row, rtgs_row, write_csv


class TestReader:
    """Test reading numbered CSV chunks."""

    def test_chunk_paths_keep_declared_order(self, tmp_path):
        paths = chunk_paths(tmp_path, "RTGS", [2, 1])
        assert [p.name for p in paths] == ["RTGS-2.csv", "RTGS-1.csv"]

    def test_reads_chunks_in_order_and_skips_blank_rows(self, tmp_path):
        write_csv(tmp_path / "NEFT-0.csv", NEFT_HEADER, [["A", "SBIN0000001"] + [""] * 8])
        write_csv(
            tmp_path / "NEFT-1.csv",
            NEFT_HEADER,
            [[""] * 10, ["B", "SBIN0000002"] + [""] * 8],
        )
        rows = list(read_csv_chunks(chunk_paths(tmp_path, "NEFT", [0, 1])))
        assert [row["IFSC"] for row in rows] == ["SBIN0000001", "SBIN0000002"]
        assert rows[0]["BANK"] == "A"

    def test_missing_chunk_is_fatal(self, tmp_path):
        with pytest.raises(SourceFormatError):
            list(read_csv_chunks(chunk_paths(tmp_path, "NEFT", [0])))

    def test_empty_chunk_is_fatal(self, tmp_path):
        (tmp_path / "NEFT-0.csv").write_text("", encoding="utf-8")
        with pytest.raises(SourceFormatError):
            list(read_csv_chunks(chunk_paths(tmp_path, "NEFT", [0])))

    def test_chunk_missing_required_column_is_fatal(self, tmp_path):
        """A renamed identifier column must abort instead of dropping every row."""
        write_csv(tmp_path / "NEFT-0.csv", NEFT_HEADER, [["A", "SBIN0000001"] + [""] * 8])
        write_csv(
            tmp_path / "NEFT-1.csv",
            ["BANK", "IFSC Code", "BRANCH"],
            [["B", "SBIN0000002", "Fort"]],
        )
        rows = read_csv_chunks(chunk_paths(tmp_path, "NEFT", [0, 1]), NeftParser.required_columns)

        assert next(rows)["IFSC"] == "SBIN0000001"
        with pytest.raises(SourceFormatError) as exc_info:
            next(rows)
        assert "IFSC" in str(exc_info.value)
        assert "STD CODE" in str(exc_info.value)

    def test_required_columns_per_source(self, tmp_path):
        write_csv(tmp_path / "RTGS-1.csv", NEFT_HEADER, [["A", "SBIN0000001"] + [""] * 8])
        with pytest.raises(SourceFormatError):
            list(read_csv_chunks(chunk_paths(tmp_path, "RTGS", [1]), RtgsParser.required_columns))

        write_csv(tmp_path / "NEFT-0.csv", NEFT_HEADER, [["A", "SBIN0000001"] + [""] * 8])
        rows = list(read_csv_chunks(chunk_paths(tmp_path, "NEFT", [0]), NeftParser.required_columns))
        assert len(rows) == 1


class TestRtgsRepair:
    """Test the column shift repair against the exact malformed shape."""

    def test_needs_realignment_only_for_digits_in_state(self):
        assert needs_rtgs_realignment(rtgs_row(STATE="080")) is True
        assert needs_rtgs_realignment(rtgs_row(STATE=" 0 80")) is True
        assert needs_rtgs_realignment(rtgs_row(STATE="KARNATAKA")) is False
        assert needs_rtgs_realignment(rtgs_row(STATE=None)) is False

    def test_fix_alignment_moves_columns_back(self):
        shifted = rtgs_row(
            ADDRESS="Bangalore Centre",
            CITY1="Bangalore",
            CITY2="KARNATAKA",
            STATE="080",
            **{"STD CODE": "22223333", "PHONE": ""},
        )
        with capture_logs() as logs:
            fixed = fix_rtgs_row_alignment(shifted)

        assert fixed["ADDRESS"] is None
        assert fixed["CITY1"] == "Bangalore Centre"
        assert fixed["CITY2"] == "Bangalore"
        assert fixed["STATE"] == "KARNATAKA"
        assert fixed["STD CODE"] == "080"
        assert fixed["PHONE"] == "22223333"
        # untouched columns
        assert fixed["IFSC"] == shifted["IFSC"]
        assert fixed["BRANCH"] == shifted["BRANCH"]
        # the input row is not modified
        assert shifted["STATE"] == "080"
        assert [entry["event"] for entry in logs] == ["rtgs.row_realigned"]

    def test_fix_alignment_warns_on_unknown_state(self):
        shifted = rtgs_row(CITY2="ATLANTIS", STATE="080")
        with capture_logs() as logs:
            fix_rtgs_row_alignment(shifted)
        assert "rtgs.unknown_state_after_realignment" in [entry["event"] for entry in logs]

    def test_shift_mapping_covers_each_column_once(self):
        targets = [target for target, _ in RTGS_SHIFT_MAPPING]
        assert len(targets) == len(set(targets))


class TestNeftParser:
    """Test NEFT parsing."""

    def test_builds_normalized_record(self, banks):
        data = NeftParser(banks).parse([neft_row()])

        record = data["SBIN0001234"]
        assert record["IFSC"] == "SBIN0001234"
        assert record["BRANCH"] == "MG Road"
        assert record["ADDRESS"] == "1 MG Road, Bangalore"
        assert record["CITY"] == "BANGALORE"
        assert record["STATE"] == "KARNATAKA"
        assert record["CONTACT"] == "+918022223333"
        assert record["MICR"] == "560002003"
        assert record["CENTRE"] is None
        assert record["NEFT"] is True
        assert record["UPI"] is True
        assert "RTGS" not in record

    def test_upi_flag_follows_bank_table(self, banks):
        data = NeftParser(banks).parse([neft_row(IFSC="HDFC0000002")])
        assert data["HDFC0000002"]["UPI"] is False

    def test_first_occurrence_wins(self, banks):
        rows = [neft_row(BRANCH="First"), neft_row(IFSC="sbin0001234", BRANCH="Second")]
        parser = NeftParser(banks)
        with capture_logs() as logs:
            data = parser.parse(rows)

        assert data["SBIN0001234"]["BRANCH"] == "First"
        assert parser.stats.duplicates == 1
        assert any(entry["log_level"] == "warning" for entry in logs)

    def test_skips_header_and_blank_identifier_rows(self, banks):
        rows = [neft_row(IFSC="IFSC"), neft_row(IFSC=""), neft_row(IFSC="  "), neft_row()]
        parser = NeftParser(banks)
        data = parser.parse(rows)
        assert list(data) == ["SBIN0001234"]
        assert parser.stats.dropped == 3
        assert parser.stats.rows_seen == 4

    def test_unsafe_identifier_aborts(self, banks):
        with pytest.raises(IdentifierError):
            NeftParser(banks).parse([neft_row(IFSC="NOT AN IFSC AT ALL")])


class TestRtgsParser:
    """Test RTGS parsing."""

    def test_maps_city_columns(self, banks):
        data = RtgsParser(banks).parse([rtgs_row()])

        record = data["SBIN0001234"]
        assert record["BANK"] == "State Bank of India"
        assert record["CENTRE"] == "BANGALORE CENTRE"
        assert record["DISTRICT"] == "BANGALORE CENTRE"
        assert record["CITY"] == "BANGALORE"
        assert record["CONTACT"] == "+918022223333"
        assert record["RTGS"] is True
        assert "NEFT" not in record

    def test_drops_secondary_header_and_garbage_rows(self, banks):
        rows = [
            rtgs_row(IFSC="IFSC_CODE"),
            rtgs_row(IFSC="BANK OF BARODA"),
            rtgs_row(IFSC="KPK HYDERABAD"),
            rtgs_row(IFSC=None),
            rtgs_row(),
        ]
        parser = RtgsParser(banks)
        data = parser.parse(rows)
        assert list(data) == ["SBIN0001234"]
        assert parser.stats.dropped == 4

    def test_configured_invalid_identifiers(self, banks):
        parser = RtgsParser(banks, invalid_identifiers=["SBIN0001234"])
        assert parser.parse([rtgs_row()]) == {}

    def test_repairs_shifted_row(self, banks):
        shifted = rtgs_row(
            ADDRESS="Bangalore Centre",
            CITY1="Bangalore",
            CITY2="KARNATAKA",
            STATE="080",
            **{"STD CODE": "22223333", "PHONE": ""},
        )
        parser = RtgsParser(banks)
        data = parser.parse([shifted])

        record = data["SBIN0001234"]
        assert record["STATE"] == "KARNATAKA"
        assert record["CITY"] == "BANGALORE"
        assert record["CENTRE"] == "BANGALORE CENTRE"
        assert record["ADDRESS"] == NOT_AVAILABLE
        assert record["CONTACT"] == "+918022223333"
        assert parser.stats.repaired == 1

    def test_truncates_long_identifier(self, banks):
        data = RtgsParser(banks).parse([rtgs_row(IFSC="SBIN0001234-OLD")])
        assert list(data) == ["SBIN0001234"]


class TestImpsParser:
    """Test IMPS records derived from the bank table."""

    def test_bank_table_rows(self, banks, bank_names):
        rows = list(bank_table_rows(banks, bank_names))
        assert [row["BANK CODE"] for row in rows] == ["ABCD", "HDFC", "SBIN"]
        assert rows[2]["BANK"] == "State Bank of India"
        assert rows[2]["UPI"] is True

    def test_builds_one_record_per_bank_with_ifsc(self, banks, bank_names):
        data = ImpsParser(banks).parse(bank_table_rows(banks, bank_names))

        assert sorted(data) == ["HDFC0000001", "SBIN0000001"]
        record = data["SBIN0000001"]
        assert record["BANK"] == "State Bank of India"
        assert record["BRANCH"] == "State Bank of India IMPS"
        assert record["IMPS"] is True
        assert record["UPI"] is True
        assert record["CONTACT"] is None
        for field in ("CENTRE", "DISTRICT", "STATE", "ADDRESS", "CITY"):
            assert record[field] == NOT_AVAILABLE

    def test_skips_identifiers_of_wrong_length(self, banks):
        rows = [{"BANK": "X", "IFSC": "SBIN00000012", "UPI": False}]
        assert ImpsParser(banks).parse(rows) == {}
