"""
IFSC dataset builder CLI.

Provides the command-line entry point for a data refresh and for the
standalone SWIFT coverage check.
"""

import sys
from typing import List, Optional

import structlog

from ifsc_scraper.core.config import get_settings
from ifsc_scraper.core.errors import PipelineError
from ifsc_scraper.core.logging import configure_logging
from ifsc_scraper.pipeline import IFSCPipeline
from ifsc_scraper.validation.swift import SwiftValidator

logger = structlog.get_logger()


def print_summary(summary: dict):
    """Pretty print a run summary."""
    print("\n=== IFSC Build Summary ===\n")
    print(f"Status: {summary['status']}")
    print(f"Duration: {summary['duration_seconds']:.2f}s")

    print("\n--- Sources ---")
    for source, count in summary["source_records"].items():
        print(
            f"{source}: {count} records, "
            f"{summary['source_dropped'].get(source, 0)} dropped, "
            f"{summary['source_duplicates'].get(source, 0)} duplicates"
        )

    print("\n--- Output ---")
    print(f"Merged: {summary['merged_records']}")
    print(f"Bank patches: {summary['bank_patches_applied']}")
    print(f"IFSC patches: {summary['patches_applied']}")
    print(f"Exported: {summary['records_exported']}")
    print()


def _fail(e: PipelineError) -> int:
    logger.critical(str(e), error_type=type(e).__name__)
    if e.hint:
        logger.info(e.hint)
    return 1


def build_command(skip_swift: bool = False) -> int:
    """Run the full pipeline, then the SWIFT check."""
    pipeline = IFSCPipeline()
    try:
        pipeline.run()
    except PipelineError as e:
        return _fail(e)
    print_summary(pipeline.summary.to_dict())

    if skip_swift:
        return 0
    return validate_swift_command()


def validate_swift_command() -> int:
    """Check SBI's published BICs against the SWIFT patch."""
    try:
        SwiftValidator().validate()
    except PipelineError as e:
        return _fail(e)
    print("All published SBI BICs are covered.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = sys.argv[1:] if argv is None else argv

    if not args:
        print("Usage: ifsc-scraper <command> [options]")
        print("\nCommands:")
        print("  build [--skip-swift]   Build all datasets, then check SWIFT coverage")
        print("  validate-swift         Only check SWIFT coverage")
        print("\nExamples:")
        print("  ifsc-scraper build")
        print("  ifsc-scraper build --skip-swift")
        print("  ifsc-scraper validate-swift")
        return 1

    settings = get_settings()
    configure_logging(settings.ENV, debug=settings.DEBUG)

    command = args[0]

    try:
        if command == "build":
            return build_command(skip_swift="--skip-swift" in args[1:])
        elif command == "validate-swift":
            return validate_swift_command()
        else:
            print(f"Unknown command: {command}")
            return 1
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
