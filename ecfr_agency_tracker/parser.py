"""
Search-Result Parser for eCFR search API responses.

This module decodes a raw response body, extracts the reported total count
and maps each result item through the DocumentNormalizer. A single malformed
item never aborts the parse.
"""

import json
import logging
from typing import Any, Optional

from .error_handler import ParseError
from .models import Document, SearchResult
from .normalizer import DocumentNormalizer


logger = logging.getLogger(__name__)

COUNT_FIELDS = ('total_count', 'count')


class SearchResultParser:
    """Parses raw search API payloads into SearchResult objects."""

    def __init__(self, normalizer: Optional[DocumentNormalizer] = None):
        """
        Initialize the parser.

        Args:
            normalizer: Normalizer applied to each result item
        """
        self.normalizer = normalizer or DocumentNormalizer()

    def parse(self, content: str) -> SearchResult:
        """
        Parse a raw response body.

        Args:
            content: Response body as JSON text

        Returns:
            SearchResult with the total count and normalized documents

        Raises:
            ParseError: If the body is not valid JSON or not a JSON object
        """
        try:
            payload = json.loads(content)
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(f"Invalid JSON in search response: {e}")
            raise ParseError(f"Invalid JSON response: {e}", cause=e)

        if not isinstance(payload, dict):
            raise ParseError(
                f"Expected a JSON object, got {type(payload).__name__}"
            )

        result = SearchResult(total_results=self._extract_total(payload))

        items = payload.get('results')
        if not isinstance(items, list):
            if items is not None:
                logger.warning(f"Ignoring non-array 'results' field: {type(items).__name__}")
            return result

        logger.info(f"Found 'results' array with {len(items)} items")
        if items and isinstance(items[0], dict):
            logger.debug(f"First item properties: {', '.join(items[0].keys())}")

        for index, item in enumerate(items):
            result.results.append(self._normalize_item(index, item))

        return result

    def _extract_total(self, payload: dict) -> int:
        for name in COUNT_FIELDS:
            total = _as_int(payload.get(name))
            if total is not None:
                return total
        return 0

    def _normalize_item(self, index: int, item: Any) -> Document:
        if not isinstance(item, dict):
            logger.warning(f"Result item {index} is not an object; using defaults")
        try:
            return self.normalizer.normalize(item)
        except Exception as e:
            logger.warning(f"Failed to normalize result item {index}: {e}")
            return Document()


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def parse_search_results(content: str) -> SearchResult:
    """Parse a raw response body with a default parser."""
    return SearchResultParser().parse(content)
