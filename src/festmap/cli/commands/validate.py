"""Validate command."""

from __future__ import annotations

import argparse

from festmap.cli.common import format_comma_or_none
from festmap.contracts.sync import ValidationReport
from festmap.intake import load_submission


def format_validation_report(report: ValidationReport) -> str:
    if not report.valid:
        return f"\nfestmap - invalid map\n\n  Error:       {report.error}\n"
    lines = [
        "",
        "festmap - map is valid",
        "",
        f"  Version:     {report.version or 'unknown'}",
        f"  Locations:   {report.total_locations}",
        f"  Categories:  {format_comma_or_none(report.categories)}",
        "",
    ]
    return "\n".join(lines)


def run_validate(args: argparse.Namespace) -> ValidationReport:
    import festmap.cli as cli

    config = cli.load_config(args.config)
    payload = load_submission(args.file, max_file_size=config.max_file_size)
    report = cli.validate_document(payload)
    print(format_validation_report(report))
    return report


__all__ = ["format_validation_report", "run_validate"]
