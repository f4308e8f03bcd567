"""Command-line interface for festmap."""

from __future__ import annotations

from festmap import SyncCoordinator as SyncCoordinator
from festmap import load_config as load_config
from festmap import validate_document as validate_document
from festmap.cli.app import main as main
from festmap.cli.commands import backup as backup_command
from festmap.cli.commands import fetch as fetch_command
from festmap.cli.commands import status as status_command
from festmap.cli.commands import submit as submit_command
from festmap.cli.commands import sync as sync_command
from festmap.cli.commands import validate as validate_command
from festmap.cli.parser import build_parser as build_parser

__all__ = [
    "SyncCoordinator",
    "backup_command",
    "build_parser",
    "fetch_command",
    "load_config",
    "main",
    "status_command",
    "submit_command",
    "sync_command",
    "validate_command",
    "validate_document",
]
