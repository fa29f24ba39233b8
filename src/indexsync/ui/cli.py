from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from indexsync.app import build_content_sync, sync_content
from indexsync.common import configure_logging
from indexsync.config import ConfigurationError, parse_locale_fallbacks

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from indexsync.domain.data_integration import SyncReport

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise Contentful entries into Algolia")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Sync content types into an index")
    sync.add_argument(
        "--content-type",
        dest="content_types",
        action="append",
        required=True,
        help="Content type id to sync (repeat for several types)",
    )
    sync.add_argument(
        "--index",
        required=True,
        help="Index name, without the configured prefix",
    )
    sync.add_argument(
        "--entry-id",
        type=str,
        help="Only sync the entry with this id",
    )
    sync.add_argument(
        "--locales",
        type=str,
        help="Locale fallback groups, e.g. 'de-CH,de-DE;en-US' (defaults to config)",
    )
    sync.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute changes without writing to the index",
    )
    return parser.parse_args(list(argv))


def _log_report(report: SyncReport) -> None:
    for content_type, result in report.results.items():
        if result.error is not None:
            log.error("%s: failed (%s)", content_type, result.error)
        elif result.batch is not None:
            log.info(
                "%s: %d records, %s%s",
                content_type,
                result.records,
                result.batch.summary(),
                "" if result.committed else " (not committed)",
            )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        locales = parse_locale_fallbacks(parsed_args.locales) if parsed_args.locales else None
        content_sync = build_content_sync(locales=locales)
    except ConfigurationError:
        configure_logging()
        log.exception("Configuration error")
        sys.exit(2)

    try:
        report = sync_content(
            parsed_args.content_types,
            parsed_args.index,
            entry_id=parsed_args.entry_id,
            dry_run=parsed_args.dry_run,
            sync=content_sync,
        )
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)

    _log_report(report)
    if not report.ok:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
