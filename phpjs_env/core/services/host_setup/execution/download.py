"""
L4 Execution — HTTP fetches.

Thin wrapper over ``urllib.request``. One attempt per URL; every
failure becomes a ``FetchError``.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Any

from phpjs_env.core.services.host_setup.data.constants import (
    HTTP_CONNECT_TIMEOUT,
    USER_AGENT,
)
from phpjs_env.core.services.host_setup.domain.errors import FetchError

logger = logging.getLogger(__name__)


class HttpFetcher:
    """Download documents and payloads from the setup endpoints."""

    def __init__(self, timeout: int = HTTP_CONNECT_TIMEOUT):
        self.timeout = timeout

    def fetch_bytes(self, url: str) -> bytes:
        """GET ``url`` and return the body.

        Raises:
            FetchError: Connection error, timeout or HTTP error status.
        """
        logger.debug("GET %s", url)
        req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                return resp.read()
        except urllib.error.HTTPError as exc:
            raise FetchError(f"HTTP {exc.code} fetching {url}", url=url) from exc
        except (urllib.error.URLError, TimeoutError, OSError) as exc:
            raise FetchError(f"Failed to fetch {url}: {exc}", url=url) from exc

    def fetch_text(self, url: str) -> str:
        return self.fetch_bytes(url).decode("utf-8", errors="replace")

    def fetch_json(self, url: str) -> Any:
        """GET ``url`` and parse the body as JSON."""
        body = self.fetch_bytes(url)
        try:
            return json.loads(body)
        except json.JSONDecodeError as exc:
            raise FetchError(f"Invalid JSON from {url}: {exc}", url=url) from exc
