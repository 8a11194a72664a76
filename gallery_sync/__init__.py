"""Dress gallery scraper and backend seed sync."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from gallery_sync.client import DeliveryError, SeedClient, SeedResponse
from gallery_sync.config import ALLOWED_SIZES, ALLOWED_TYPES, build_seed_url
from gallery_sync.errors import SyncError
from gallery_sync.html_utils import extract_dresses, extract_dresses_from_file
from gallery_sync.models import Dress, check_record
from gallery_sync.sanitize import sanitize_sizes, sanitize_type
from gallery_sync.sync import GallerySync, SyncOptions, collect_records, run_sync

__all__ = [
    # Version
    "__version__",
    # Config
    "ALLOWED_SIZES",
    "ALLOWED_TYPES",
    "build_seed_url",
    # Models
    "Dress",
    "check_record",
    # Sanitizer / extractor
    "sanitize_type",
    "sanitize_sizes",
    "extract_dresses",
    "extract_dresses_from_file",
    # Delivery
    "SeedClient",
    "SeedResponse",
    "DeliveryError",
    # Driver
    "SyncError",
    "SyncOptions",
    "GallerySync",
    "collect_records",
    "run_sync",
]
