"""HTML parsing and extraction utilities for gallery pages."""

from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from bs4 import BeautifulSoup, Tag

from gallery_sync.config import GALLERY_ITEM_CLASS, PRICE_CLASS
from gallery_sync.models import Dress
from gallery_sync.sanitize import guess_colour, parse_leading_int, sanitize_sizes, sanitize_type

__all__ = [
    "extract_data_attributes",
    "extract_image",
    "extract_price_marker",
    "extract_plain_name",
    "parse_gallery_item",
    "extract_dresses",
    "extract_dresses_from_file",
]

DATA_PREFIX = "data-"


def extract_data_attributes(tag: Tag) -> Dict[str, str]:
    """Collect the data-* attributes of a gallery element, prefix stripped."""
    data: Dict[str, str] = {}
    for key, value in tag.attrs.items():
        if not key.startswith(DATA_PREFIX) or len(key) == len(DATA_PREFIX):
            continue
        if isinstance(value, list):
            value = " ".join(value)
        data[key[len(DATA_PREFIX):]] = value
    return data


def extract_image(tag: Tag) -> Tuple[Optional[str], Optional[str]]:
    """Return (src, alt) of the first <img> with a non-empty src."""
    for img in tag.find_all("img"):
        src = img.get("src")
        if isinstance(src, str) and src.strip():
            alt = img.get("alt")
            return src.strip(), alt.strip() if isinstance(alt, str) else None
    return None, None


def extract_price_marker(tag: Tag) -> Optional[int]:
    """Parse the price from the first element with the price class."""
    price_el = tag.find(class_=PRICE_CLASS)
    if price_el is None:
        return None
    return parse_leading_int(price_el.get_text())


def extract_plain_name(tag: Tag) -> Optional[str]:
    """Text of the first bare <p> (no attributes, no child elements)."""
    for p in tag.find_all("p"):
        if p.attrs or p.find(True) is not None:
            continue
        text = p.get_text(strip=True)
        if text:
            return text
    return None


def parse_gallery_item(tag: Tag, dress_id: int) -> Dress:
    """Build a Dress from one gallery element.

    Each field falls back independently, so a block with nothing usable
    still yields a record filled with defaults.
    """
    data = extract_data_attributes(tag)
    src, alt = extract_image(tag)

    image = src or data.get("image") or ""

    name = data.get("name") or alt or extract_plain_name(tag) or f"Dress {dress_id}"

    price = parse_leading_int(data.get("price"))
    if price is None:
        price = extract_price_marker(tag)
    if price is None:
        price = 0

    raw_type = data.get("type") or ("wedding" if "wedding" in name.lower() else None)

    raw_sizes = data.get("sizes")
    sizes = sanitize_sizes(raw_sizes.split(",") if raw_sizes else None)

    colour = data.get("colour") or guess_colour(image)

    return Dress(
        id=dress_id,
        name=name,
        price=price,
        type=sanitize_type(raw_type),
        sizes=tuple(sizes),
        colour=colour,
        image=image,
    )


def extract_dresses(html: Union[str, bytes]) -> List[Dress]:
    """Extract one Dress per gallery-item element, ids 1..N in document order.

    Bytes are decoded by BeautifulSoup, which honours a declared charset
    and otherwise guesses the encoding.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    return [
        parse_gallery_item(tag, dress_id)
        for dress_id, tag in enumerate(soup.find_all(class_=GALLERY_ITEM_CLASS), start=1)
    ]


def extract_dresses_from_file(path: Union[str, Path]) -> List[Dress]:
    """Read an HTML file in whatever encoding it uses and extract its dresses."""
    return extract_dresses(Path(path).read_bytes())
