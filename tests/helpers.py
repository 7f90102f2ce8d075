"""Builders for test input files and raw rows."""

import csv
import json
from pathlib import Path

import yaml

NEFT_HEADER = [
    "BANK",
    "IFSC",
    "MICR CODE",
    "BRANCH",
    "ADDRESS",
    "STD CODE",
    "CONTACT",
    "CITY",
    "DISTRICT",
    "STATE",
]

RTGS_HEADER = [
    "BANK NAME",
    "IFSC",
    "MICR_CODE",
    "BRANCH",
    "ADDRESS",
    "CITY1",
    "CITY2",
    "STATE",
    "STD CODE",
    "PHONE",
]


def write_csv(path: Path, header: list[str], rows: list[list[str]]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)
    return path


def write_yaml(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


def write_json(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def neft_row(**overrides: str) -> dict:
    """A well-formed NEFT row as the CSV reader would yield it."""
    row = {
        "BANK": "State Bank of India",
        "IFSC": "SBIN0001234",
        "MICR CODE": "560002003",
        "BRANCH": "MG  Road",
        "ADDRESS": " 1 MG Road, Bangalore ,",
        "STD CODE": "080",
        "CONTACT": "22223333",
        "CITY": "bangalore",
        "DISTRICT": "Bangalore Urban",
        "STATE": "Karnataka",
    }
    row.update(overrides)
    return row


def rtgs_row(**overrides: str) -> dict:
    """A well-formed RTGS row as the CSV reader would yield it."""
    row = {
        "BANK NAME": "State Bank of India",
        "IFSC": "SBIN0001234",
        "MICR_CODE": "560002003",
        "BRANCH": "MG Road",
        "ADDRESS": "1 MG Road",
        "CITY1": "Bangalore Centre",
        "CITY2": "Bangalore",
        "STATE": "KARNATAKA",
        "STD CODE": "080",
        "PHONE": "22223333",
    }
    row.update(overrides)
    return row

