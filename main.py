"""Main entry point for netbook."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from netbook.config import get_settings
from netbook.core.errors import PersistenceFailure
from netbook.core.headless import run_headless
from netbook.storage import HistoryStore, discover_collection, export_last_response
from netbook.tui import run_tui
from netbook.utils import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='netbook',
        description="Terminal HTTP request workbench",
    )
    parser.add_argument(
        '-c', '--collection', type=Path,
        help='Collection file (default: discovered in the working directory)',
    )

    subparsers = parser.add_subparsers(dest='command')

    open_parser = subparsers.add_parser('open', help='Open a collection interactively')
    open_parser.add_argument('path', type=Path, help='Collection file to open')

    headless_parser = subparsers.add_parser(
        'headless-run', help='Execute one request and print the response'
    )
    headless_parser.add_argument('name', help='Name of the request to run')
    headless_parser.add_argument(
        '-c', '--collection', type=Path, dest='headless_collection', required=True,
        help='Collection file containing the request',
    )

    export_parser = subparsers.add_parser(
        'export', help='Write the most recent response to a file'
    )
    export_parser.add_argument('path', type=Path, help='Output JSON file')

    return parser


def main():
    """Main application entry point."""
    args = build_parser().parse_args()

    settings = get_settings()
    level = "DEBUG" if settings.debug else settings.log_level

    try:
        if args.command == 'headless-run':
            setup_logging(level)
            code = run_headless_mode(args.name, args.headless_collection, settings)
        elif args.command == 'export':
            setup_logging(level)
            code = run_export_mode(args.path, settings)
        else:
            setup_logging(level, settings.log_file)
            collection = args.path if args.command == 'open' else args.collection
            code = run_interactive_mode(collection, settings)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        code = 130
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        code = 1

    sys.exit(code)


def run_interactive_mode(collection_path, settings) -> int:
    """Run the terminal interface on a given or discovered collection."""
    if collection_path is None:
        collection_path = discover_collection()
    logger.info(f"Opening collection {collection_path}")
    asyncio.run(run_tui(collection_path, settings))
    return 0


def run_headless_mode(name: str, collection_path: Path, settings) -> int:
    """Execute one request by name and print the outcome."""
    logger.info(f"Headless run of '{name}' from {collection_path}")
    return asyncio.run(run_headless(name, collection_path, settings))


def run_export_mode(path: Path, settings) -> int:
    """Export the most recent history entry's response."""
    store = HistoryStore(settings.history_path, settings.history_max_entries)
    try:
        written = export_last_response(store, path)
    except PersistenceFailure as e:
        print(f"Export failed: {e}", file=sys.stderr)
        return 1

    if written is None:
        print("No history to export")
    else:
        print(f"Exported last response to {written}")
    return 0


if __name__ == '__main__':
    main()
