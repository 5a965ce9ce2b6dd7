"""
Snapshot Store for persisting the current eCFR data snapshot.

The current snapshot is a single JSON file that is fully replaced on every
save. Saving also appends the snapshot's per-agency counts to the historical
log.
"""

import logging
import threading
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .config import Config
from .error_handler import StorageReadError
from .historical import HistoricalSeriesManager
from .json_files import read_json, write_json
from .models import AgencyStatistics, Document, Snapshot, utc_now
from .statistics_engine import calculate_statistics


logger = logging.getLogger(__name__)


class SnapshotStore:
    """Saves and loads the current snapshot in a data directory."""

    def __init__(self, data_directory: Optional[str] = None,
                 historical: Optional[HistoricalSeriesManager] = None):
        """
        Initialize the snapshot store.

        Args:
            data_directory: Directory holding the data files (created if missing)
            historical: Historical log manager (default: one in the same directory)
        """
        self.data_directory = Path(data_directory or Config.DATA_DIRECTORY)
        self.data_directory.mkdir(parents=True, exist_ok=True)

        self.current_data_file = Config.current_data_path(str(self.data_directory))
        self.historical = historical or HistoricalSeriesManager(
            Config.historical_data_path(str(self.data_directory))
        )
        self._lock = threading.Lock()

        logger.info(f"Snapshot store initialized with data directory: {self.data_directory}")

    def save(self, snapshot: Snapshot) -> Snapshot:
        """
        Save a snapshot as the current record.

        Statistics are recomputed from the documents and fetched_at is set to
        the current time. The historical append is best effort.

        Args:
            snapshot: Snapshot whose documents should be saved

        Returns:
            The snapshot as saved

        Raises:
            StorageWriteError: If the current snapshot file cannot be written
        """
        fetched_at = utc_now()
        saved = replace(
            snapshot,
            fetched_at=fetched_at,
            documents=list(snapshot.documents),
            statistics=calculate_statistics(snapshot.documents, fetched_at)
        )

        with self._lock:
            write_json(self.current_data_file, saved.to_dict())

        self.historical.append(saved)

        logger.info(f"Data saved successfully to {self.current_data_file}")
        return saved

    def load(self) -> Optional[Snapshot]:
        """
        Load the current snapshot.

        Returns:
            The stored snapshot, or None if nothing has been saved yet or the
            file cannot be read
        """
        try:
            data = read_json(self.current_data_file)
        except FileNotFoundError:
            logger.warning(f"Data file not found: {self.current_data_file}")
            return None
        except StorageReadError as e:
            logger.error(f"Error loading data: {e}")
            return None

        try:
            return Snapshot.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Error loading data: invalid snapshot in {self.current_data_file}: {e}")
            return None

    def get_statistics(self) -> List[AgencyStatistics]:
        """Statistics of the current snapshot, or an empty list."""
        snapshot = self.load()
        return snapshot.statistics if snapshot else []

    def get_documents(self) -> List[Document]:
        """Documents of the current snapshot, or an empty list."""
        snapshot = self.load()
        return snapshot.documents if snapshot else []
