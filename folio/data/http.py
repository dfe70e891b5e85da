"""HTTP JSON cursor — rows fetched from a URL returning a JSON array."""

import logging
from typing import Any

import httpx

from folio.data.base import BufferedCursor, Row
from folio.errors import DataAccessError

logger = logging.getLogger(__name__)


def _navigate_json_path(data: Any, path: str) -> Any:
    """Navigate a dot-separated path into a nested JSON structure."""
    for key in path.split("."):
        if isinstance(data, dict):
            data = data[key]
        elif isinstance(data, list) and key.isdigit():
            data = data[int(key)]
        else:
            raise KeyError(f"Cannot navigate '{key}' in {type(data).__name__}")
    return data


class HttpJsonCursor(BufferedCursor):
    """Fetches ``query`` (the URL) and walks the list of objects it returns.

    The URL goes through tag substitution like any SQL query, so
    ``https://api/orders?customer={customers.id}`` works for child sections.
    """

    adapter = "HttpJsonCursor"

    def __init__(self, url: str, json_path: str | None = None, method: str = "GET",
                 headers: dict[str, str] | None = None, timeout: float = 30,
                 transport: httpx.BaseTransport | None = None):
        super().__init__(url)
        self.json_path = json_path
        self.method = method.upper()
        self.headers = dict(headers or {})
        self.timeout = timeout
        self._transport = transport

    def execute(self) -> None:
        self.reset()
        try:
            with httpx.Client(transport=self._transport) as client:
                resp = client.request(self.method, self._query, headers=self.headers, timeout=self.timeout)
                resp.raise_for_status()
            data = resp.json()
            if self.json_path:
                data = _navigate_json_path(data, self.json_path)
        except (httpx.HTTPError, ValueError, KeyError, IndexError) as exc:
            raise DataAccessError(self.adapter, f"{self.method} {self._query} failed: {exc}") from exc

        # Normalize to a list of dicts
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            raise DataAccessError(self.adapter, f"expected a JSON array, got {type(data).__name__}")
        self._load([r if isinstance(r, dict) else {"value": r} for r in data])
        logger.debug("Fetched %d rows from %s", self._count, self._query)

