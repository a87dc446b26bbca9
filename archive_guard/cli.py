"""
Command Line Interface for Archive Guard.

Provides ``extract`` and ``create`` commands around the guarded pipelines.
"""

import argparse
import sys
from dataclasses import replace
from typing import List, Optional

from .cli_helpers import exit_with_error, map_exception_to_exit_code
from .config import GuardSettings
from .constants import ExitCodes
from .errors import ArchiveGuardError
from .guard import ArchiveGuard
from .logging_config import configure_logging, get_logger


def _build_guard(args) -> ArchiveGuard:
    settings = GuardSettings.from_env()
    overrides = {}
    if getattr(args, 'install_root', None):
        overrides['install_root'] = args.install_root
    if getattr(args, 'timeout', None) is not None:
        overrides['process_timeout'] = args.timeout
    if getattr(args, 'cleanup', False):
        overrides['cleanup_on_failure'] = True
    if overrides:
        settings = replace(settings, **overrides)
    return ArchiveGuard(settings)


def _fail(exc: Exception) -> None:
    logger = get_logger(__name__)
    exit_code = map_exception_to_exit_code(exc)
    if isinstance(exc, ArchiveGuardError):
        logger.debug("%s", exc.describe())
        message = exc.message
    elif exit_code == ExitCodes.INVALID_ARGUMENT:
        message = f"Invalid argument: {exc}"
    else:
        logger.debug("Unexpected failure", exc_info=exc)
        message = f"Unexpected failure: {exc}"
    exit_with_error(message, exit_code)


class ExtractCommand:
    """Handles guarded archive extraction."""

    @staticmethod
    def add_parser(subparsers) -> None:
        """Add extract command parser to subparsers."""
        parser = subparsers.add_parser('extract', help='Safely extract a zip archive')
        parser.add_argument('archive', help='Path to the zip archive')
        parser.add_argument('destination', help='Existing directory to extract into')
        parser.add_argument('--install-root',
                            help='Installation root holding bin/<extractor>')
        parser.add_argument('--timeout', type=int,
                            help='Seconds allowed per external process (0 disables)')
        parser.add_argument('--cleanup', action='store_true',
                            help='Remove extracted files again if extraction fails')
        parser.set_defaults(func=ExtractCommand.execute)

    @staticmethod
    def execute(args) -> None:
        """Extract an archive and print its declared size."""
        try:
            size = _build_guard(args).extract(args.archive, args.destination)
        except Exception as exc:
            _fail(exc)
        else:
            print(size)


class CreateCommand:
    """Handles guarded archive creation."""

    @staticmethod
    def add_parser(subparsers) -> None:
        """Add create command parser to subparsers."""
        parser = subparsers.add_parser('create', help='Zip a directory, keeping symlinks as links')
        parser.add_argument('source', help='Directory to archive')
        parser.add_argument('archive', help='Path of the zip archive to write')
        parser.add_argument('--timeout', type=int,
                            help='Seconds allowed for the zip process (0 disables)')
        parser.set_defaults(func=CreateCommand.execute)

    @staticmethod
    def execute(args) -> None:
        """Create an archive and print the tool output."""
        try:
            output = _build_guard(args).create(args.source, args.archive)
        except Exception as exc:
            _fail(exc)
        else:
            if output:
                print(output, end="")


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='archive-guard',
        description='Extract and create zip archives without escaping their directories'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    ExtractCommand.add_parser(subparsers)
    CreateCommand.add_parser(subparsers)

    return parser


def main(args: Optional[List[str]] = None) -> None:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (uses sys.argv if None)
    """
    configure_logging()
    parser = create_parser()

    if args is None:
        args = sys.argv[1:]

    if not args:
        parser.print_help()
        sys.exit(ExitCodes.OK)

    parsed_args = parser.parse_args(args)

    if hasattr(parsed_args, 'func'):
        parsed_args.func(parsed_args)
    else:
        parser.print_help()
        sys.exit(ExitCodes.OK)


if __name__ == '__main__':
    main()
