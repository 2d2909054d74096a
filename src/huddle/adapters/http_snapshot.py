"""HTTP snapshot adapter - fetches an exported snapshot document."""

import logging

import requests

from huddle.core.deadlines import DeadlineSources

from .file_snapshot import SnapshotError, sources_from_document

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class HttpSnapshotSource:
    """
    Reads records from a snapshot served over HTTP.

    Implements DeadlineSource protocol. No business logic - just I/O.
    """

    def __init__(self, url: str, token: str = "", timeout: int = DEFAULT_TIMEOUT):
        self.url = url
        self.token = token
        self.timeout = timeout
        self._session = requests.Session()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def fetch_sources(self) -> DeadlineSources:
        """Download the snapshot and build the four collections."""
        try:
            resp = self._session.get(self.url, headers=self._headers(), timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise SnapshotError(f"Failed to fetch snapshot from {self.url}: {e}") from e

        try:
            document = resp.json()
        except ValueError as e:
            raise SnapshotError(f"Invalid JSON from {self.url}: {e}") from e

        logger.debug(f"Fetched snapshot from {self.url}")
        return sources_from_document(document)
