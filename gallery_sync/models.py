"""Data models for dress records."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple, Union

from gallery_sync.config import ALLOWED_TYPES, BACKEND_SIZES

__all__ = ["Dress", "REQUIRED_FIELDS", "check_record", "record_to_dict"]

# Fields the backend's dress schema marks as required
REQUIRED_FIELDS: Tuple[str, ...] = ("id", "name", "price", "type", "sizes", "colour", "image")


@dataclass(frozen=True)
class Dress:
    """A single dress extracted from a gallery page.

    Instances are immutable; the pipeline only ever collects them.
    """

    id: int
    name: str
    price: int
    type: str
    sizes: Tuple[str, ...] = field(default_factory=tuple)
    colour: str = "unknown"
    image: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON shape expected by the seed endpoint."""
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "type": self.type,
            "sizes": list(self.sizes),
            "colour": self.colour,
            "image": self.image,
        }


Record = Union[Dress, Mapping[str, Any]]


def record_to_dict(record: Record) -> Any:
    """Serialize a record; values loaded from JSON pass through unchanged."""
    if isinstance(record, Dress):
        return record.to_dict()
    return record


def check_record(record: Record) -> List[str]:
    """List the reasons the backend would reject a record.

    Advisory only: callers log the problems and still send the record.
    """
    if isinstance(record, Dress):
        data: Mapping[str, Any] = record.to_dict()
    elif isinstance(record, Mapping):
        data = record
    else:
        return ["record is not an object"]

    problems: List[str] = []
    for name in REQUIRED_FIELDS:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            problems.append(f"missing {name}")

    dress_type = data.get("type")
    if dress_type and dress_type not in ALLOWED_TYPES:
        problems.append(f"type {dress_type!r} not accepted")

    sizes = data.get("sizes") or []
    if isinstance(sizes, (list, tuple)):
        bad_sizes = [s for s in sizes if s not in BACKEND_SIZES]
        if bad_sizes:
            problems.append(f"sizes not accepted: {', '.join(map(str, bad_sizes))}")
    else:
        problems.append("sizes is not a list")

    return problems
