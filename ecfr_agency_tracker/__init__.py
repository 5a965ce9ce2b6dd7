"""
eCFR Agency Tracker

A tool for fetching eCFR search results, computing per-agency document
counts and content checksums, and keeping a historical record of them.
"""

__version__ = "1.0.0"
__author__ = "eCFR Agency Tracker Team"
__description__ = "Track eCFR document counts and checksums by agency"

from .models import (
    Document,
    SearchResult,
    AgencyStatistics,
    HistoricalChange,
    Snapshot,
    FetchSummary,
)
from .error_handler import (
    ECFRTrackerError,
    NetworkError,
    ParseError,
    StorageReadError,
    StorageWriteError,
    ConfigurationError,
)
from .normalizer import DocumentNormalizer
from .parser import SearchResultParser, parse_search_results
from .statistics_engine import calculate_checksum, calculate_statistics
from .historical import HistoricalSeriesManager
from .storage import SnapshotStore
from .api_client import ECFRClient
from .service import ECFRDataService
from .report_generator import ReportGenerator
from .config import Config

__all__ = [
    'Document',
    'SearchResult',
    'AgencyStatistics',
    'HistoricalChange',
    'Snapshot',
    'FetchSummary',
    'ECFRTrackerError',
    'NetworkError',
    'ParseError',
    'StorageReadError',
    'StorageWriteError',
    'ConfigurationError',
    'DocumentNormalizer',
    'SearchResultParser',
    'parse_search_results',
    'calculate_checksum',
    'calculate_statistics',
    'HistoricalSeriesManager',
    'SnapshotStore',
    'ECFRClient',
    'ECFRDataService',
    'ReportGenerator',
    'Config'
]
