"""Exporters for the consolidated dataset."""

from ifsc_scraper.exports.exporter import (
    CSV_COLUMNS,
    branch_suffix,
    build_code_index,
    export_all,
    export_code_index,
    export_csv,
    export_json_by_bank,
    export_json_list,
    group_by_bank,
)

__all__ = [
    "CSV_COLUMNS",
    "branch_suffix",
    "build_code_index",
    "export_all",
    "export_code_index",
    "export_csv",
    "export_json_by_bank",
    "export_json_list",
    "group_by_bank",
]
