"""
Service facade combining the API client, snapshot store and historical log.

These are the operations offered to the presentation layer (the CLI, or any
web front end built on top of this package).
"""

import logging
from typing import List, Optional

from .api_client import ECFRClient
from .error_handler import log_execution_time
from .models import (
    AgencyStatistics,
    Document,
    FetchSummary,
    HistoricalChange,
    SearchResult,
    Snapshot,
)
from .storage import SnapshotStore


logger = logging.getLogger(__name__)


class ECFRDataService:
    """Fetches, stores and serves eCFR agency data."""

    def __init__(self, client: Optional[ECFRClient] = None,
                 store: Optional[SnapshotStore] = None):
        """
        Initialize the service.

        Args:
            client: eCFR API client (default: configured from Config)
            store: Snapshot store (default: Config.DATA_DIRECTORY)
        """
        self.client = client or ECFRClient()
        self.store = store or SnapshotStore()

    def fetch_raw(self, page_size: int = None) -> str:
        """Raw search API response body."""
        return self.client.fetch_raw(page_size)

    @log_execution_time
    def fetch_and_parse(self, page_size: int = None) -> SearchResult:
        """Fetch and normalize search results without saving them."""
        return self.client.fetch_and_parse(page_size)

    @log_execution_time
    def save_snapshot(self, snapshot: Snapshot) -> Snapshot:
        """Save a snapshot as the current record and extend the historical log."""
        return self.store.save(snapshot)

    def load_snapshot(self) -> Optional[Snapshot]:
        """Current snapshot, or None if no data has been fetched yet."""
        return self.store.load()

    def get_statistics(self) -> List[AgencyStatistics]:
        """Agency statistics of the current snapshot."""
        return self.store.get_statistics()

    def get_documents(self) -> List[Document]:
        """Documents of the current snapshot."""
        return self.store.get_documents()

    def get_historical(self) -> List[HistoricalChange]:
        """Historical log, oldest first."""
        return self.store.historical.load()

    def cleanup_historical(self) -> int:
        """Remove placeholder agency entries from the historical log."""
        return self.store.historical.cleanup()

    def fetch_and_save(self, page_size: int = None) -> FetchSummary:
        """
        Fetch search results and save them as the current snapshot.

        Args:
            page_size: Number of results to request

        Returns:
            FetchSummary describing the saved snapshot

        Raises:
            NetworkError: If the request fails
            ParseError: If the response cannot be parsed
            StorageWriteError: If the snapshot cannot be written
        """
        logger.info(f"Fetching eCFR data with page size: {page_size}")

        search_result = self.fetch_and_parse(page_size)
        saved = self.save_snapshot(Snapshot(documents=search_result.results))

        summary = FetchSummary(
            document_count=len(search_result.results),
            total_results=search_result.total_results,
            fetched_at=saved.fetched_at
        )
        logger.info(summary.get_summary())
        return summary

    def close(self) -> None:
        """Release the HTTP session."""
        self.client.close()
