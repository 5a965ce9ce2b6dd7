"""
eCFR search API client for retrieving raw and parsed search results.

This module handles communication with the eCFR search API, including
rate limiting and error handling. Failed calls are not retried; callers
decide whether to try again.
"""

import time
import logging
import requests
from typing import Optional

from .config import Config
from .error_handler import NetworkError
from .models import SearchResult
from .parser import SearchResultParser


logger = logging.getLogger(__name__)


class ECFRClient:
    """Client for the eCFR search API."""

    def __init__(self, base_url: str = None, rate_limit: float = None,
                 timeout: int = None, parser: Optional[SearchResultParser] = None):
        """
        Initialize the eCFR API client.

        Args:
            base_url: Search results endpoint URL
            rate_limit: Maximum requests per second (default from config)
            timeout: Request timeout in seconds (default from config)
            parser: Parser for search responses
        """
        self.base_url = base_url or Config.ECFR_API_URL
        self.rate_limit = rate_limit or Config.ECFR_API_RATE_LIMIT
        self.timeout = timeout or Config.REQUEST_TIMEOUT
        self.parser = parser or SearchResultParser()
        self.session = requests.Session()
        self.last_request_time = 0.0

        # Set up session headers
        self.session.headers.update({
            'User-Agent': 'eCFR-Agency-Tracker/1.0.0 (Educational/Research Tool)',
            'Accept': 'application/json',
            'Accept-Encoding': 'gzip, deflate'
        })

        logger.info(f"Initialized API client with base URL: {self.base_url}")

    def _enforce_rate_limit(self) -> None:
        """Enforce rate limiting between API requests."""
        if self.rate_limit <= 0:
            return

        min_interval = 1.0 / self.rate_limit
        elapsed = time.time() - self.last_request_time

        if elapsed < min_interval:
            sleep_time = min_interval - elapsed
            logger.debug(f"Rate limiting: sleeping for {sleep_time:.2f}s")
            time.sleep(sleep_time)

        self.last_request_time = time.time()

    def fetch_raw(self, page_size: int = None) -> str:
        """
        Fetch the raw search response body.

        Args:
            page_size: Number of results to request (per_page)

        Returns:
            Response body text

        Raises:
            NetworkError: If the request fails or returns a non-success status
        """
        page_size = page_size or Config.DEFAULT_PAGE_SIZE
        params = {'per_page': page_size}

        self._enforce_rate_limit()
        logger.info(f"Fetching eCFR data from: {self.base_url}?per_page={page_size}")

        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()

        except requests.exceptions.Timeout as e:
            logger.error(f"Request to {self.base_url} timed out")
            raise NetworkError("Request timed out", cause=e)

        except requests.exceptions.ConnectionError as e:
            logger.error(f"Connection error fetching {self.base_url}: {e}")
            raise NetworkError("Connection failed", cause=e)

        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else 'unknown'
            logger.error(f"HTTP error {status} from {self.base_url}")
            raise NetworkError(f"HTTP error: {status}", cause=e)

        except requests.exceptions.RequestException as e:
            logger.error(f"Unexpected request error: {e}")
            raise NetworkError(f"Request failed: {e}", cause=e)

        content = response.text
        logger.debug(f"API Response (first 500 chars): {content[:500]}")
        return content

    def fetch_and_parse(self, page_size: int = None) -> SearchResult:
        """
        Fetch search results and normalize them into documents.

        Args:
            page_size: Number of results to request (per_page)

        Returns:
            Parsed SearchResult

        Raises:
            NetworkError: If the request fails
            ParseError: If the response body is not valid JSON
        """
        content = self.fetch_raw(page_size)
        result = self.parser.parse(content)

        logger.info(f"Successfully fetched {len(result.results)} documents from eCFR")
        return result

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()
            logger.debug("API client session closed")
