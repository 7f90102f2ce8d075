"""Diagnostics run against external references."""

from ifsc_scraper.validation.swift import SwiftValidator, extract_bics, patch_bics

__all__ = ["SwiftValidator", "extract_bics", "patch_bics"]
