"""Fetcher for remote ICS calendar feeds."""
import logging

import requests

from processor.errors import FetchError

logger = logging.getLogger(__name__)


class FeedFetcher:
    """Fetcher retrieving calendar feed text from a URL."""

    HEADERS = {'Accept': 'text/calendar, text/plain;q=0.9, */*;q=0.8'}

    def fetch(self, url: str) -> str:
        """
        Fetch feed text in a single attempt.

        Args:
            url: Feed URL supplied by the caller

        Returns:
            Response body as text

        Raises:
            FetchError: If the request fails, returns an error status or an
                empty body
        """
        logger.info(f"Fetching calendar feed from {url}")

        try:
            response = requests.get(url, headers=self.HEADERS)
            response.raise_for_status()
        except requests.RequestException as e:
            status_text = self._status_text(e)
            logger.error(f"Calendar feed request failed: {status_text}")
            raise FetchError(status_text) from e

        # Feeds served without a charset are UTF-8 in practice
        if 'charset' not in response.headers.get('Content-Type', '').lower():
            response.encoding = 'utf-8'

        if not response.text:
            logger.error(f"Calendar feed returned no data (status {response.status_code})")
            raise FetchError(response.reason or str(response.status_code))

        logger.info(f"Fetched {len(response.text)} characters of calendar data")
        return response.text

    def _status_text(self, error: requests.RequestException) -> str:
        response = error.response
        if response is not None and response.reason:
            return f"{response.status_code} {response.reason}"
        return str(error)
