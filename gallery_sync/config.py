"""Configuration and constants for the gallery sync."""

import os
from typing import Optional, Tuple

__all__ = [
    "ALLOWED_TYPES",
    "DEFAULT_TYPE",
    "ALLOWED_SIZES",
    "BACKEND_SIZES",
    "DEFAULT_SIZES",
    "DEFAULT_COLOUR",
    "GALLERY_ITEM_CLASS",
    "PRICE_CLASS",
    "HTML_EXTENSIONS",
    "JSON_EXTENSIONS",
    "DEFAULT_API_BASE",
    "SEED_PATH",
    "HEADERS",
    "REQUEST_TIMEOUT",
    "get_request_timeout",
    "WATCH_POLL_INTERVAL",
    "EXIT_OK",
    "EXIT_MISSING_TOKEN",
    "EXIT_FILE_NOT_FOUND",
    "EXIT_INVALID_JSON",
    "EXIT_UNSUPPORTED_FILE",
    "EXIT_NO_HTML_FILES",
    "EXIT_NO_DRESSES",
    "EXIT_DELIVERY_FAILED",
    "EXIT_INTERRUPTED",
    "get_admin_token",
    "get_api_base",
    "get_frontend_dir",
    "build_seed_url",
]

# =============================================================================
# Record allow-lists
# =============================================================================

ALLOWED_TYPES: Tuple[str, ...] = ("wedding", "casual", "evening", "cocktail", "party", "prom")
DEFAULT_TYPE = "casual"

# "xl" is accepted by the backend but not by the gallery extractor.
# Pending product-owner confirmation, see DESIGN.md.
ALLOWED_SIZES: Tuple[str, ...] = ("xs", "s", "m", "l")
BACKEND_SIZES: Tuple[str, ...] = ("xs", "s", "m", "l", "xl")
DEFAULT_SIZES: Tuple[str, ...] = ("s", "m", "l")

DEFAULT_COLOUR = "unknown"

# =============================================================================
# Markup
# =============================================================================

GALLERY_ITEM_CLASS = "gallery-item"
PRICE_CLASS = "price"

HTML_EXTENSIONS: Tuple[str, ...] = (".html", ".htm")
JSON_EXTENSIONS: Tuple[str, ...] = (".json",)

# =============================================================================
# Seed endpoint
# =============================================================================

DEFAULT_API_BASE = "http://localhost:5000/api"
SEED_PATH = "/dresses/seed"

HEADERS = {
    "User-Agent": "gallery-sync/0.1 (dress gallery seeder)",
    "Content-Type": "application/json",
    "Accept": "application/json",
}

# None means no timeout beyond the networking stack's own
REQUEST_TIMEOUT: Optional[float] = None

# Watch mode polling (seconds)
WATCH_POLL_INTERVAL = 1.0

# =============================================================================
# Exit statuses
# =============================================================================

EXIT_OK = 0
EXIT_MISSING_TOKEN = 2
EXIT_FILE_NOT_FOUND = 3
EXIT_INVALID_JSON = 4
EXIT_UNSUPPORTED_FILE = 5
EXIT_NO_HTML_FILES = 6
EXIT_NO_DRESSES = 7
EXIT_DELIVERY_FAILED = 10
EXIT_INTERRUPTED = 130


# =============================================================================
# Environment fallbacks
# =============================================================================

def get_admin_token(explicit: Optional[str] = None) -> Optional[str]:
    """Return the admin token: explicit value, then ADMIN_TOKEN, then ADMIN_PASSWORD."""
    return explicit or os.getenv("ADMIN_TOKEN") or os.getenv("ADMIN_PASSWORD") or None


def get_api_base(explicit: Optional[str] = None) -> str:
    """Return the API base URL: explicit value, then API_BASE, then the local default."""
    return explicit or os.getenv("API_BASE") or DEFAULT_API_BASE


def get_frontend_dir(explicit: Optional[str] = None) -> str:
    """Return the directory scanned for gallery pages.

    Falls back to FRONTEND_DIR and finally to the current working directory.
    """
    return explicit or os.getenv("FRONTEND_DIR") or os.getcwd()


def get_request_timeout() -> Optional[float]:
    """Return the request timeout in seconds from SYNC_REQUEST_TIMEOUT.

    Read on each call so values loaded from .env are seen.

    Raises:
        ValueError: If the value is not a positive number
    """
    raw = os.getenv("SYNC_REQUEST_TIMEOUT", "").strip()
    if not raw:
        return REQUEST_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"SYNC_REQUEST_TIMEOUT must be a number of seconds, got {raw!r}") from None
    if timeout <= 0:
        raise ValueError(f"SYNC_REQUEST_TIMEOUT must be positive, got {raw!r}")
    return timeout


def build_seed_url(api_base: str) -> str:
    """Join the API base and the seed path, ignoring trailing slashes on the base."""
    return api_base.rstrip("/") + SEED_PATH
