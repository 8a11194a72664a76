"""Seed sync driver: collect dress records and push them to the backend.

One run moves through CollectingInput -> Validated -> Delivering and then
either returns (idle) or keeps watching the input files, re-delivering on
every change until the process is stopped.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

import requests  # type: ignore[import-untyped]

from gallery_sync.client import DeliveryError, SeedClient, build_payload
from gallery_sync.config import (
    EXIT_DELIVERY_FAILED,
    EXIT_FILE_NOT_FOUND,
    EXIT_INVALID_JSON,
    EXIT_MISSING_TOKEN,
    EXIT_NO_DRESSES,
    EXIT_NO_HTML_FILES,
    EXIT_OK,
    EXIT_UNSUPPORTED_FILE,
    HTML_EXTENSIONS,
    JSON_EXTENSIONS,
    WATCH_POLL_INTERVAL,
    build_seed_url,
    get_admin_token,
    get_api_base,
    get_frontend_dir,
    get_request_timeout,
)
from gallery_sync.errors import SyncError
from gallery_sync.html_utils import extract_dresses_from_file
from gallery_sync.logging_config import get_logger, log_sync_event
from gallery_sync.models import Record, check_record
from gallery_sync.watch import FileWatcher

__all__ = [
    "SyncOptions",
    "SourceSet",
    "GallerySync",
    "resolve_token",
    "load_json_records",
    "find_html_files",
    "collect_records",
    "run_sync",
]

logger = get_logger("sync")


@dataclass
class SyncOptions:
    """Options for one sync run, mirroring the CLI flags."""

    token: Optional[str] = None
    file: Optional[str] = None
    files: Optional[str] = None  # comma-separated
    directory: Optional[str] = None
    api_base: Optional[str] = None
    watch: bool = False
    dry_run: bool = False
    output: Optional[str] = None
    poll_interval: float = WATCH_POLL_INTERVAL


@dataclass
class SourceSet:
    """Records collected from the input, plus the HTML files they came from."""

    records: Any
    files: List[str] = field(default_factory=list)


def resolve_token(options: SyncOptions) -> str:
    """Return the admin token or fail with EXIT_MISSING_TOKEN."""
    token = get_admin_token(options.token)
    if not token:
        raise SyncError(
            "Admin token not provided. Use --token=TOKEN or set ADMIN_TOKEN in env.",
            EXIT_MISSING_TOKEN,
        )
    return token


def load_json_records(path: str) -> Any:
    """Load records from a JSON file exactly as written."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise SyncError(f"Cannot read {path}: {e}", EXIT_FILE_NOT_FOUND) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SyncError(f"Invalid JSON file {path}: {e}", EXIT_INVALID_JSON) from e


def find_html_files(directory: str) -> List[str]:
    """List top-level HTML files in a directory, sorted by name."""
    if not os.path.isdir(directory):
        raise SyncError(f"Directory not found: {directory}", EXIT_FILE_NOT_FOUND)

    html_files: List[str] = []
    for name in sorted(os.listdir(directory)):
        path = os.path.join(directory, name)
        if os.path.isfile(path) and os.path.splitext(name)[1].lower() in HTML_EXTENSIONS:
            html_files.append(os.path.abspath(path))
    return html_files


def _collect_single_file(file_arg: str) -> SourceSet:
    path = os.path.abspath(file_arg)
    if not os.path.isfile(path):
        raise SyncError(f"File not found: {path}", EXIT_FILE_NOT_FOUND)

    ext = os.path.splitext(path)[1].lower()
    if ext in JSON_EXTENSIONS:
        logger.info(f"Loading dresses from JSON file {path}")
        return SourceSet(records=load_json_records(path))
    if ext in HTML_EXTENSIONS:
        logger.info(f"Parsing gallery page {path}")
        try:
            dresses = extract_dresses_from_file(path)
        except OSError as e:
            raise SyncError(f"Cannot read {path}: {e}", EXIT_FILE_NOT_FOUND) from e
        return SourceSet(records=dresses, files=[path])

    raise SyncError("Unsupported file type. Use .json or .html", EXIT_UNSUPPORTED_FILE)


def _collect_many_files(html_files: List[str], source: str) -> SourceSet:
    if not html_files:
        raise SyncError(f"No HTML files found to parse in {source}", EXIT_NO_HTML_FILES)

    records: List[Record] = []
    for path in html_files:
        try:
            parsed = extract_dresses_from_file(path)
        except OSError as e:
            logger.warning(f"Failed to parse {path}: {e}")
            continue

        with_image = [d for d in parsed if d.image]
        skipped = len(parsed) - len(with_image)
        if skipped:
            logger.warning(f"Skipping {skipped} dress(es) without an image in {path}")
        logger.info(f"  {os.path.basename(path)}: {len(with_image)} dresses")
        records.extend(with_image)

    return SourceSet(records=records, files=list(html_files))


def collect_records(options: SyncOptions) -> SourceSet:
    """Gather records from the first matching input source.

    Order: --file (JSON or HTML), then the --files list, then every HTML
    file in the scan directory.
    """
    if options.file:
        return _collect_single_file(options.file)

    if options.files:
        html_files = [os.path.abspath(f.strip()) for f in options.files.split(",") if f.strip()]
        return _collect_many_files(html_files, "--files")

    directory = get_frontend_dir(options.directory)
    logger.info(f"Scanning {directory} for gallery pages")
    return _collect_many_files(find_html_files(directory), directory)


class GallerySync:
    """Owns the current record set and delivers it to the seed endpoint.

    The record set is only replaced by a successful watch re-parse, and
    deliveries run one after another.
    """

    def __init__(self, client: SeedClient, records: List[Record], dry_run: bool = False) -> None:
        self.client = client
        self.records: List[Record] = list(records)
        self.dry_run = dry_run

    def deliver(self, fatal: bool = True) -> None:
        """Post the current record set once.

        Raises:
            SyncError: With EXIT_DELIVERY_FAILED on a transport failure, if fatal
        """
        if self.dry_run:
            logger.info(f"Dry run: would post {len(self.records)} dresses to {self.client.url}")
            return

        logger.info(f"Posting {len(self.records)} dresses to {self.client.url}")
        try:
            result = self.client.post_dresses(self.records)
        except DeliveryError as e:
            log_sync_event("delivery_failed", {"url": self.client.url, "error": str(e)})
            if fatal:
                raise SyncError(f"Request failed: {e}", EXIT_DELIVERY_FAILED) from e
            logger.error(f"Request failed: {e}")
            return

        if result.ok:
            logger.info(f"Response status: {result.status_code}")
        else:
            logger.warning(f"Response status: {result.status_code}")
        logger.info(result.body)
        log_sync_event("delivery_complete", {
            "url": self.client.url,
            "status_code": result.status_code,
            "dresses": len(self.records),
        })

    def handle_change(self, path: str) -> None:
        """Re-parse one changed file and re-deliver its dresses.

        A non-empty result replaces the whole record set, including records
        that came from other files.
        """
        logger.info(f"{os.path.basename(path)} changed, reparsing and syncing...")
        log_sync_event("file_changed", {"path": path})
        try:
            dresses = extract_dresses_from_file(path)
        except OSError as e:
            logger.warning(f"Watch sync failed: {e}")
            return

        if not dresses:
            logger.warning(f"No dresses parsed from {path}, keeping previous records")
            return

        self.records = list(dresses)
        self.deliver(fatal=False)

    def watch(self, paths: List[str], poll_interval: float = WATCH_POLL_INTERVAL) -> None:
        """Watch the given files and re-deliver on each change."""
        FileWatcher(paths, poll_interval=poll_interval).run(self.handle_change)


def _log_record_problems(records: List[Record]) -> None:
    for index, record in enumerate(records, start=1):
        problems = check_record(record)
        if problems:
            logger.warning(f"Dress #{index} may be rejected by the backend: {'; '.join(problems)}")


def _write_output(path: str, records: List[Record]) -> None:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(build_payload(records), indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Wrote {len(records)} dresses to {out}")


def run_sync(options: SyncOptions, session: Optional[requests.Session] = None) -> int:
    """Run one sync: collect, validate, deliver, then optionally watch.

    Args:
        options: Parsed sync options
        session: Optional requests.Session (used by tests)

    Returns:
        EXIT_OK once delivery is done and watch mode (if any) ends

    Raises:
        SyncError: For every fatal condition, carrying its exit status
    """
    token = resolve_token(options)
    url = build_seed_url(get_api_base(options.api_base))
    try:
        timeout = get_request_timeout()
    except ValueError as e:
        logger.warning(f"{e}; sending without a timeout")
        timeout = None
    log_sync_event("sync_start", {"url": url, "watch": options.watch, "dry_run": options.dry_run})

    sources = collect_records(options)
    records = sources.records
    if not isinstance(records, list) or not records:
        raise SyncError("No dresses parsed from source. Aborting.", EXIT_NO_DRESSES)

    log_sync_event("records_collected", {"count": len(records), "files": sources.files})
    _log_record_problems(records)

    if options.output:
        _write_output(options.output, records)

    client = SeedClient(url, token, session=session, timeout=timeout)
    sync = GallerySync(client, records, dry_run=options.dry_run)
    sync.deliver(fatal=True)

    if options.watch:
        if not sources.files:
            logger.info("Nothing to watch for JSON input")
            return EXIT_OK
        logger.info("Watch mode enabled, watching HTML files for changes...")
        sync.watch(sources.files, poll_interval=options.poll_interval)

    return EXIT_OK
