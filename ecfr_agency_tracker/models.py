"""
Data models for the eCFR Agency Tracker.

This module defines the core data structures used throughout the application
for representing normalized documents, search results, per-agency statistics,
historical counts and persisted snapshots.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional


UNKNOWN_AGENCY = "Unknown Agency"
UNKNOWN_TYPE = "Unknown"


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_date(value: Any) -> Optional[date]:
    if not value:
        return None
    return date.fromisoformat(str(value)[:10])


@dataclass
class Document:
    """A regulatory document normalized from one search result item."""
    document_number: Optional[str] = None
    title: Optional[str] = None
    agency_name: str = UNKNOWN_AGENCY
    type: str = UNKNOWN_TYPE
    publication_date: Optional[date] = None
    citation: Optional[str] = None
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary with a fixed key order."""
        return {
            'document_number': self.document_number,
            'title': self.title,
            'agency_name': self.agency_name,
            'type': self.type,
            'publication_date': self.publication_date.isoformat() if self.publication_date else None,
            'citation': self.citation,
            'url': self.url
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Document':
        """Create a document from a stored dictionary."""
        return cls(
            document_number=data.get('document_number'),
            title=data.get('title'),
            agency_name=data.get('agency_name') or UNKNOWN_AGENCY,
            type=data.get('type') or UNKNOWN_TYPE,
            publication_date=_parse_date(data.get('publication_date')),
            citation=data.get('citation'),
            url=data.get('url')
        )


@dataclass
class SearchResult:
    """Parsed response of one search API call."""
    total_results: int = 0
    results: List[Document] = field(default_factory=list)


@dataclass
class AgencyStatistics:
    """Document count and content checksum for one agency group."""
    agency_name: str
    document_count: int
    checksum: str
    last_updated: datetime

    def __post_init__(self):
        """Validate statistics data after initialization."""
        if self.document_count < 0:
            raise ValueError("Document count cannot be negative")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'agency_name': self.agency_name,
            'document_count': self.document_count,
            'checksum': self.checksum,
            'last_updated': self.last_updated.isoformat()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AgencyStatistics':
        return cls(
            agency_name=data['agency_name'],
            document_count=int(data['document_count']),
            checksum=data['checksum'],
            last_updated=_parse_timestamp(data['last_updated'])
        )


@dataclass
class HistoricalChange:
    """Document count of one agency at one fetch time."""
    agency_name: str
    date: datetime
    document_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'agency_name': self.agency_name,
            'date': self.date.isoformat(),
            'document_count': self.document_count
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HistoricalChange':
        timestamp = _parse_timestamp(data['date'])
        if timestamp is None:
            raise ValueError("Historical entry has no date")
        return cls(
            agency_name=data['agency_name'],
            date=timestamp,
            document_count=int(data['document_count'])
        )


@dataclass
class Snapshot:
    """Documents and statistics as of one fetch."""
    fetched_at: datetime = field(default_factory=utc_now)
    documents: List[Document] = field(default_factory=list)
    statistics: List[AgencyStatistics] = field(default_factory=list)

    @property
    def total_documents(self) -> int:
        """Sum of document counts across agency statistics."""
        return sum(s.document_count for s in self.statistics)

    @property
    def agency_count(self) -> int:
        """Number of distinct agencies in the statistics."""
        return len(self.statistics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'fetched_at': self.fetched_at.isoformat(),
            'documents': [d.to_dict() for d in self.documents],
            'statistics': [s.to_dict() for s in self.statistics]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Snapshot':
        return cls(
            fetched_at=_parse_timestamp(data['fetched_at']),
            documents=[Document.from_dict(d) for d in data.get('documents') or []],
            statistics=[AgencyStatistics.from_dict(s) for s in data.get('statistics') or []]
        )


@dataclass
class FetchSummary:
    """Outcome of a fetch-and-save operation."""
    document_count: int
    total_results: int
    fetched_at: datetime

    def get_summary(self) -> str:
        """Generate a human-readable summary of the fetch."""
        return (
            f"Successfully fetched and saved {self.document_count} documents "
            f"(total results reported: {self.total_results:,}) "
            f"at {self.fetched_at.strftime('%Y-%m-%d %H:%M:%S')} UTC"
        )
