"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import asyncio
import logging
import sys

from festmap.contracts.exceptions import (
    AuthenticationError,
    BackupError,
    ConfigError,
    InvalidStructureError,
    MalformedInputError,
    MergeAbortedError,
    PersistError,
    UpstreamFetchError,
)


def main(argv: list[str] | None = None) -> int:
    import festmap.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        if args.command == "validate":
            report = cli.validate_command.run_validate(args)
            return 0 if report.valid else 2
        if args.command == "fetch":
            asyncio.run(cli.fetch_command.run_fetch(args))
        elif args.command == "submit":
            asyncio.run(cli.submit_command.run_submit(args))
        elif args.command == "sync":
            asyncio.run(cli.sync_command.run_sync(args))
        elif args.command == "backup":
            asyncio.run(cli.backup_command.run_backup(args))
        elif args.command == "status":
            asyncio.run(cli.status_command.run_status(args))
        return 0
    except (ConfigError, MalformedInputError, InvalidStructureError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except (AuthenticationError, UpstreamFetchError, MergeAbortedError, PersistError, BackupError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except Exception as exc:  # pragma: no cover
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
