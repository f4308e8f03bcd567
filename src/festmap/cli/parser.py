"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("festmap")
    except PackageNotFoundError:
        return "0.0.0"


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default="./festmap.json", help="Path to festmap.json")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="festmap")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    fetch_parser = subparsers.add_parser("fetch", help="Fetch and validate the canonical map")
    fetch_parser.add_argument("--output", "-o", default=None, help="Write the fetched map to this file")
    _add_common_arguments(fetch_parser)

    submit_parser = subparsers.add_parser("submit", help="Merge a map submission into the canonical map")
    submit_parser.add_argument("file", help="Path to the submitted map JSON file")
    submit_parser.add_argument("--dry-run", action="store_true", help="Merge without committing or backing up")
    _add_common_arguments(submit_parser)

    sync_parser = subparsers.add_parser("sync", help="Refresh the local copy of the canonical map")
    _add_common_arguments(sync_parser)

    validate_parser = subparsers.add_parser("validate", help="Validate a map file without submitting it")
    validate_parser.add_argument("file", help="Path to the map JSON file")
    _add_common_arguments(validate_parser)

    backup_parser = subparsers.add_parser("backup", help="Snapshot the canonical map locally")
    _add_common_arguments(backup_parser)

    status_parser = subparsers.add_parser("status", help="Report configuration, backups and store connectivity")
    _add_common_arguments(status_parser)

    return parser


__all__ = ["build_parser"]
