"""Metadata client for fetching the releases file."""

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from src.errors import ParseError, RetrievalError

logger = logging.getLogger(__name__)


class MetadataClient:
    """Client for fetching and parsing the releases JSON file."""

    def __init__(self, timeout: int = 30, max_retries: int = 0):
        """Initialize the metadata client.

        Args:
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts (0 disables retries)
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create a requests session with retry configuration."""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def fetch_releases(self, releases_uri: str) -> list[dict[str, Any]]:
        """Fetch and parse the releases file.

        Args:
            releases_uri: HTTP(S) URL, ``file://`` URI or local path

        Returns:
            List of raw release objects

        Raises:
            RetrievalError: If the file cannot be fetched
            ParseError: If the content is not a JSON array of objects
        """
        if urlparse(releases_uri).scheme in ("http", "https"):
            text = self._fetch_remote(releases_uri)
        else:
            text = self._read_local(releases_uri)

        return self.parse_releases(text, releases_uri)

    def _fetch_remote(self, url: str) -> str:
        logger.info(f"Fetching releases from {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to fetch releases from {url}: {e}")
            raise RetrievalError(url, str(e)) from e

        logger.info(f"Successfully fetched releases (status: {response.status_code})")
        return response.text

    def _read_local(self, releases_uri: str) -> str:
        parsed = urlparse(releases_uri)
        path = Path(unquote(parsed.path)) if parsed.scheme == "file" else Path(releases_uri)
        logger.info(f"Reading releases from {path}")

        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to read releases from {path}: {e}")
            raise RetrievalError(releases_uri, str(e)) from e

    def parse_releases(self, text: str, source: str = "<string>") -> list[dict[str, Any]]:
        """Parse the releases JSON text.

        Args:
            text: JSON document
            source: Where the text came from, for error messages

        Returns:
            List of raw release objects

        Raises:
            ParseError: If the text is not valid JSON or not an array of objects
        """
        try:
            releases = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse releases JSON from {source}: {e}")
            logger.error(f"Response content: {text[:500]}...")
            raise ParseError(f"Invalid JSON in {source}: {e}") from e

        if not isinstance(releases, list):
            raise ParseError(
                f"Expected a JSON array in {source}, got {type(releases).__name__}"
            )

        for index, release in enumerate(releases):
            if not isinstance(release, dict):
                raise ParseError(f"Release #{index} in {source} is not an object")

        logger.debug(f"Parsed {len(releases)} releases from {source}")
        return releases
