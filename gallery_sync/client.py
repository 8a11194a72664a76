"""HTTP delivery to the backend seed endpoint."""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

import requests  # type: ignore[import-untyped]

from gallery_sync.config import HEADERS, REQUEST_TIMEOUT
from gallery_sync.logging_config import get_logger
from gallery_sync.models import Record, record_to_dict

__all__ = [
    "DeliveryError",
    "SeedResponse",
    "SeedClient",
    "create_session",
    "build_payload",
]

logger = get_logger("client")


class DeliveryError(Exception):
    """Raised when the seed request could not be sent or answered."""
    pass


@dataclass
class SeedResponse:
    """Status code and raw body returned by the seed endpoint."""

    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def create_session(token: str) -> requests.Session:
    """Create a requests Session carrying the JSON and bearer auth headers."""
    session = requests.Session()
    session.headers.update(HEADERS)
    session.headers["Authorization"] = f"Bearer {token}"
    return session


def build_payload(records: Iterable[Record]) -> Dict[str, Any]:
    """Wrap records in the body shape the seed endpoint expects."""
    return {"dresses": [record_to_dict(r) for r in records]}


class SeedClient:
    """Posts record sets to the seed endpoint, one attempt per call."""

    def __init__(
        self,
        url: str,
        token: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = REQUEST_TIMEOUT,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.session = session or create_session(token)
        if session is not None:
            self.session.headers.update(HEADERS)
            self.session.headers["Authorization"] = f"Bearer {token}"

    def post_dresses(self, records: Iterable[Record]) -> SeedResponse:
        """POST {"dresses": [...]} to the seed URL.

        HTTP error statuses are returned to the caller, not raised.

        Raises:
            DeliveryError: If the request fails at the transport level
        """
        payload = build_payload(records)
        try:
            resp = self.session.post(self.url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.debug(f"Transport error posting to {self.url}: {e}")
            raise DeliveryError(f"Request to {self.url} failed: {e}") from e

        return SeedResponse(status_code=resp.status_code, body=resp.text)
