"""Command-line entry point — wires services and dispatches subcommands."""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from tardis.config import LOG_LEVELS, get_config
from tardis.context import TardisContext, create_context
from tardis.core.listing import list_history, relative_path
from tardis.errors import TardisError
from tardis.logger import setup_logger


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="code-tardis",
        description="List and restore VS Code local history backups for files in a directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Files under the current directory that have backups
  %(prog)s list

  # Every backup with its timestamp and location
  %(prog)s -C ~/project list --verbose

  # Restore the newest backup of one file
  %(prog)s restore src/app.py

Default history paths:
  macOS:   ~/Library/Application Support/Code/User/History
  Linux:   ~/.config/Code/User/History
  Windows: %%APPDATA%%/Code/User/History
""",
    )
    parser.add_argument(
        "-C", "--dir",
        default=".",
        help="Directory to search for backed-up files (default: current directory)",
    )
    parser.add_argument(
        "--history-dir",
        default=None,
        help="Local history directory (default: from config, else auto-detect)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Console log level (default: from config, WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    list_parser = subparsers.add_parser("list", help="List backed-up files in the directory")
    list_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show every backup with its timestamp and path",
    )

    restore_parser = subparsers.add_parser("restore", help="Restore files from their newest backup")
    restore_parser.add_argument(
        "files",
        nargs="*",
        help="Files to restore (default: every file with backups)",
    )
    restore_parser.add_argument(
        "-n", "--dry-run",
        action="store_true",
        help="Show what would be restored without writing files",
    )

    return parser


# Command handlers

def cmd_list(ctx: TardisContext, args: argparse.Namespace) -> int:
    """Handle the 'list' command."""
    files = ctx.scanner.scan(ctx.work_dir)
    files.sort(key=lambda f: relative_path(f, ctx.work_dir))
    for line in list_history(files, ctx.work_dir, verbose=args.verbose):
        print(line)
    return 0


def cmd_restore(ctx: TardisContext, args: argparse.Namespace) -> int:
    """Handle the 'restore' command."""
    files = ctx.scanner.scan(ctx.work_dir)
    actions = ctx.restore_manager.plan_restore(files, ctx.work_dir, args.files)
    for action in actions:
        print(action.describe())
        if not args.dry_run:
            ctx.restore_manager.apply(action)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "list": cmd_list,
        "restore": cmd_restore,
    }

    try:
        config = get_config()
        setup_logger(args.log_level or config.log_level, config.log_dir)
        ctx = create_context(config, args.dir, args.history_dir)
        logger.debug(f"Using local history at {ctx.history_root}")
        return commands[args.command](ctx, args)
    except TardisError as e:
        logger.debug(f"Aborting: {e!r}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
