"""
Historical Series Manager for per-agency document counts over time.

Every saved snapshot appends one entry per agency to the historical log. The
log keeps the most recent entries of each agency and is stored sorted by
date, oldest first.
"""

import logging
import threading
from pathlib import Path
from typing import Dict, Iterable, List

from .error_handler import StorageReadError, StorageWriteError
from .json_files import read_json, write_json
from .models import HistoricalChange, Snapshot


logger = logging.getLogger(__name__)

RETENTION_PER_AGENCY = 100

# Placeholders left behind by agency names that could not be resolved
INVALID_AGENCY_NAMES = frozenset(
    ["Unknown", "Unknown Agency"] + [str(n) for n in range(1, 11)]
)


def apply_retention(entries: Iterable[HistoricalChange],
                    limit: int = RETENTION_PER_AGENCY) -> List[HistoricalChange]:
    """
    Keep the newest entries of each agency and sort the result by date.

    Args:
        entries: Historical entries in any order
        limit: Maximum entries kept per agency

    Returns:
        Retained entries sorted ascending by date; entries with equal dates
        keep their input order
    """
    by_agency: Dict[str, List[HistoricalChange]] = {}
    for entry in entries:
        by_agency.setdefault(entry.agency_name, []).append(entry)

    retained = []
    for agency_entries in by_agency.values():
        newest_first = sorted(agency_entries, key=lambda h: h.date, reverse=True)
        retained.extend(newest_first[:limit])

    return sorted(retained, key=lambda h: h.date)


class HistoricalSeriesManager:
    """Maintains the bounded historical log on disk."""

    def __init__(self, file_path: Path):
        """
        Initialize the manager.

        Args:
            file_path: Path of the historical log JSON file
        """
        self.file_path = Path(file_path)
        self._lock = threading.Lock()

    def load(self) -> List[HistoricalChange]:
        """
        Load the historical log.

        Returns:
            Stored entries, or an empty list if the file is missing or corrupt
        """
        try:
            data = read_json(self.file_path)
        except FileNotFoundError:
            return []
        except StorageReadError as e:
            logger.error(f"Error loading historical data: {e}")
            return []

        if not isinstance(data, list):
            logger.error(f"Historical data in {self.file_path} is not a list; ignoring it")
            return []

        entries = []
        for index, record in enumerate(data):
            try:
                entries.append(HistoricalChange.from_dict(record))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping invalid historical entry {index}: {e}")
        return entries

    def append(self, snapshot: Snapshot) -> bool:
        """
        Append one entry per agency statistic of a snapshot.

        Failures are logged and reported through the return value; they
        never propagate to the caller.

        Args:
            snapshot: Saved snapshot with statistics and fetched_at set

        Returns:
            True if the log was written
        """
        new_entries = [
            HistoricalChange(
                agency_name=stat.agency_name,
                date=snapshot.fetched_at,
                document_count=stat.document_count
            )
            for stat in snapshot.statistics
        ]

        with self._lock:
            try:
                entries = apply_retention(self.load() + new_entries)
                write_json(self.file_path, [e.to_dict() for e in entries])
            except StorageWriteError as e:
                logger.error(f"Error appending historical data: {e}")
                return False
            except Exception as e:
                logger.error(f"Unexpected error appending historical data: {e}", exc_info=True)
                return False

        logger.info(f"Appended {len(new_entries)} historical entries "
                    f"({len(entries)} retained)")
        return True

    def cleanup(self) -> int:
        """
        Remove entries whose agency name is a placeholder value.

        The log is rewritten only if entries were removed.

        Returns:
            Number of entries removed

        Raises:
            StorageWriteError: If the cleaned log cannot be written
        """
        with self._lock:
            entries = self.load()
            cleaned = sorted(
                (e for e in entries if e.agency_name not in INVALID_AGENCY_NAMES),
                key=lambda h: h.date
            )

            removed = len(entries) - len(cleaned)
            if removed:
                write_json(self.file_path, [e.to_dict() for e in cleaned])
                logger.info(f"Cleaned up {removed} invalid historical entries")
            else:
                logger.info("No invalid historical entries found")

        return removed
