"""Command-line interface for the gallery sync."""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from gallery_sync.config import DEFAULT_API_BASE, WATCH_POLL_INTERVAL
from gallery_sync.errors import SyncError
from gallery_sync.logging_config import get_logger, setup_logging
from gallery_sync.sync import SyncOptions, run_sync

__all__ = ["main", "parse_args", "options_from_args"]

logger = get_logger("cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gallery-sync",
        description="Extract dresses from gallery HTML pages and seed the backend",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Environment:
  ADMIN_TOKEN / ADMIN_PASSWORD   admin token when --token is not given
  API_BASE                       API base URL (default: {DEFAULT_API_BASE})
  FRONTEND_DIR                   directory scanned for HTML files
  SYNC_REQUEST_TIMEOUT           request timeout in seconds (default: none)

Examples:
  # Seed from every .html file in the front-end directory
  gallery-sync --token=secret --dir=../frontend

  # Seed from a hand-written JSON list of dresses
  gallery-sync --token=secret --file=gallery.json

  # Keep the backend in sync while editing the gallery page
  gallery-sync --token=secret --file=gallerypage.html --watch
        """,
    )

    # Credentials and endpoint
    parser.add_argument("--token", help="Admin bearer token")
    parser.add_argument(
        "--url",
        dest="api_base",
        help=f"API base URL; /dresses/seed is appended (default: {DEFAULT_API_BASE})",
    )

    # Input selection
    parser.add_argument("--file", help="Single .json or .html/.htm input file")
    parser.add_argument("--files", help="Comma-separated list of HTML files")
    parser.add_argument(
        "--dir",
        "--directory",
        dest="directory",
        help="Directory scanned for top-level HTML files",
    )

    # Modes
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Re-sync whenever an input HTML file changes",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=WATCH_POLL_INTERVAL,
        help=f"Seconds between file checks in watch mode (default: {WATCH_POLL_INTERVAL})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Collect and validate dresses without posting them",
    )
    parser.add_argument(
        "--output",
        metavar="PATH",
        help="Also write the seed payload to a JSON file",
    )

    # Logging
    parser.add_argument(
        "--log-dir",
        metavar="PATH",
        help="Write JSONL logs to this directory",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug output")

    return parser.parse_args(argv)


def options_from_args(args: argparse.Namespace) -> SyncOptions:
    return SyncOptions(
        token=args.token,
        file=args.file,
        files=args.files,
        directory=args.directory,
        api_base=args.api_base,
        watch=args.watch,
        dry_run=args.dry_run,
        output=args.output,
        poll_interval=args.poll_interval,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI. Returns the process exit status."""
    # .env is looked up from the working directory, not the package
    load_dotenv(find_dotenv(usecwd=True))
    args = parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=bool(args.log_dir),
        log_dir=Path(args.log_dir) if args.log_dir else None,
    )

    try:
        return run_sync(options_from_args(args))
    except SyncError as e:
        logger.error(str(e))
        return e.exit_code
