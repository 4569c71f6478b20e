"""
Restaurant directory client for the Restaurant Finder system.

This module issues one HTTP GET per postcode search against the remote
restaurant directory and maps every transport or decoding failure into the
DirectoryError taxonomy.
"""

import asyncio
import logging
from typing import Optional
from urllib.parse import quote

import requests

from ..errors import DecodingError, InvalidInputError, TransportError
from ..models.config import DEFAULT_BASE_URL, Configuration
from ..models.restaurant import SearchResult
from ..models.status import ErrorKind
from .response_decoder import ResponseDecoder

logger = logging.getLogger(__name__)


def clean_postcode(postcode: str) -> str:
    """Remove every whitespace character from a postcode."""
    return "".join(postcode.split())


class RestaurantDirectoryClient:
    """Client for the by-postcode restaurant directory endpoint."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize directory client.

        Args:
            base_url: Endpoint the cleaned postcode is appended to
            timeout: Request timeout in seconds
            session: HTTP session to use; one is created when omitted
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.decoder = ResponseDecoder()

        # A plain session makes exactly one attempt per request
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: Configuration) -> "RestaurantDirectoryClient":
        return cls(base_url=config.base_url, timeout=config.request_timeout)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        """Release the HTTP session."""
        self.session.close()

    def build_url(self, postcode: str) -> str:
        """Build the request URL for an already cleaned postcode."""
        return f"{self.base_url}/{quote(postcode, safe='')}"

    def validate_postcode(self, postcode: str) -> str:
        """
        Clean a postcode and reject it when nothing is left.

        Returns:
            The cleaned postcode

        Raises:
            InvalidInputError: If the postcode is empty or only whitespace
        """
        cleaned = clean_postcode(postcode or "")
        if not cleaned:
            raise InvalidInputError("Postcode cannot be empty")
        return cleaned

    async def search(self, postcode: str) -> SearchResult:
        """
        Fetch the restaurants delivering to a postcode.

        The blocking request runs on the default executor so the event loop
        stays free while it is in flight.
        """
        cleaned = self.validate_postcode(postcode)
        return await asyncio.get_running_loop().run_in_executor(
            None, self.fetch, cleaned
        )

    def fetch(self, postcode: str) -> SearchResult:
        """
        Fetch and decode the directory response for a postcode.

        Args:
            postcode: UK postcode; whitespace is removed before use

        Returns:
            Decoded SearchResult. An empty restaurant list is not an error.

        Raises:
            InvalidInputError: If the postcode is empty
            TransportError: If no usable HTTP response was received
            DecodingError: If the response body does not match the schema
        """
        cleaned = self.validate_postcode(postcode)
        url = self.build_url(cleaned)

        try:
            logger.debug(f"Fetching restaurants: {url}")

            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()

        except requests.exceptions.Timeout as e:
            logger.warning(f"Timeout fetching restaurants for {cleaned}")
            raise TransportError(ErrorKind.TIMEOUT, f"Request timed out: {e}") from e

        except requests.exceptions.ConnectionError as e:
            logger.warning(f"Connection error fetching restaurants for {cleaned}")
            raise TransportError(ErrorKind.OFFLINE, f"Connection failed: {e}") from e

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error(f"HTTP error {status_code} fetching restaurants for {cleaned}")
            raise TransportError(
                ErrorKind.BAD_RESPONSE, f"Unexpected HTTP status {status_code}"
            ) from e

        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {url}: {e}")
            raise TransportError(ErrorKind.BAD_RESPONSE, f"Request failed: {e}") from e

        if not response.content:
            logger.error(f"Empty response body for {cleaned}")
            raise TransportError(ErrorKind.BAD_RESPONSE, "Response body is empty")

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Response for {cleaned} is not valid JSON: {e}")
            raise DecodingError(f"Invalid JSON: {e}") from e

        try:
            result = self.decoder.decode(payload)
        except DecodingError as e:
            logger.error(
                f"Response for {cleaned} does not match schema: {e.message}"
            )
            raise

        logger.info(f"Found {len(result.restaurants)} restaurants for {cleaned}")
        return result
