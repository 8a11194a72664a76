"""Allow-list sanitization for raw gallery field values."""

import re
from typing import Iterable, List, Optional

from gallery_sync.config import ALLOWED_SIZES, ALLOWED_TYPES, DEFAULT_COLOUR, DEFAULT_SIZES, DEFAULT_TYPE

__all__ = [
    "sanitize_type",
    "sanitize_sizes",
    "guess_colour",
    "parse_leading_int",
]

# Digits at the start of a value, optionally behind a currency symbol
LEADING_INT_RE = re.compile(r"^\s*[$£€]?\s*(\d+)")


def sanitize_type(raw: Optional[str]) -> str:
    """Normalize a dress type to one of ALLOWED_TYPES.

    Anything outside the allow-list, including empty input, collapses to
    the default type.
    """
    if not raw:
        return DEFAULT_TYPE
    value = str(raw).lower().strip()
    return value if value in ALLOWED_TYPES else DEFAULT_TYPE


def sanitize_sizes(raw_values: Optional[Iterable[str]]) -> List[str]:
    """Normalize size tokens against ALLOWED_SIZES.

    None yields the default sizes. Invalid tokens are dropped, input order
    is kept and duplicates are not removed.
    """
    if raw_values is None:
        return list(DEFAULT_SIZES)
    cleaned = (str(v).lower().strip() for v in raw_values)
    return [v for v in cleaned if v in ALLOWED_SIZES]


def guess_colour(image: Optional[str]) -> str:
    """Guess a colour from the image file name."""
    if image and "white" in image.lower():
        return "white"
    return DEFAULT_COLOUR


def parse_leading_int(text: Optional[str]) -> Optional[int]:
    """Parse the integer at the start of text, e.g. '$199.00' -> 199."""
    if not text:
        return None
    match = LEADING_INT_RE.match(text)
    if not match:
        return None
    return int(match.group(1))
