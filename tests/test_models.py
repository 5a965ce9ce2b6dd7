"""Tests for the data models module."""

import pytest
from datetime import date, datetime, timezone

from ecfr_agency_tracker.models import (
    AgencyStatistics,
    Document,
    FetchSummary,
    HistoricalChange,
    Snapshot,
)
from ecfr_agency_tracker.title_map import TITLE_AGENCY_MAP, map_title_number


STAMP = datetime(2024, 1, 15, 12, 30, tzinfo=timezone.utc)


class TestDocument:
    """Test cases for the Document data class."""

    def test_defaults(self):
        """Test default field values."""
        doc = Document()

        assert doc.agency_name == "Unknown Agency"
        assert doc.type == "Unknown"
        assert doc.document_number is None

    def test_dict_round_trip(self):
        """Test conversion to and from a dictionary."""
        doc = Document(
            document_number="2024-1",
            title="Scope",
            agency_name="Labor",
            type="Rule",
            publication_date=date(2024, 1, 15),
            citation="29 CFR 1.1",
            url="https://example.gov"
        )

        data = doc.to_dict()
        assert data['publication_date'] == '2024-01-15'
        assert list(data) == ['document_number', 'title', 'agency_name', 'type',
                              'publication_date', 'citation', 'url']
        assert Document.from_dict(data) == doc

    def test_from_dict_fills_defaults(self):
        """Test that missing stored values get defaults."""
        doc = Document.from_dict({'agency_name': None})

        assert doc.agency_name == "Unknown Agency"
        assert doc.type == "Unknown"


class TestAgencyStatistics:
    """Test cases for the AgencyStatistics data class."""

    def test_negative_document_count(self):
        """Test validation with negative document count."""
        with pytest.raises(ValueError, match="Document count cannot be negative"):
            AgencyStatistics("A", -1, "0" * 64, STAMP)

    def test_dict_round_trip(self):
        """Test conversion to and from a dictionary."""
        stat = AgencyStatistics("A", 3, "a" * 64, STAMP)
        assert AgencyStatistics.from_dict(stat.to_dict()) == stat


class TestHistoricalChange:
    """Test cases for the HistoricalChange data class."""

    def test_naive_dates_are_utc(self):
        """Test that stored dates without an offset are read as UTC."""
        change = HistoricalChange.from_dict({
            'agency_name': 'A', 'date': '2024-01-15T12:30:00', 'document_count': 2
        })
        assert change.date == STAMP

    def test_zulu_suffix(self):
        """Test dates written with a Z suffix."""
        change = HistoricalChange.from_dict({
            'agency_name': 'A', 'date': '2024-01-15T12:30:00Z', 'document_count': 2
        })
        assert change.date == STAMP

    def test_missing_date_is_rejected(self):
        """Test that a null or empty date is invalid."""
        for value in (None, ""):
            with pytest.raises(ValueError, match="no date"):
                HistoricalChange.from_dict({'agency_name': 'A', 'date': value, 'document_count': 1})


class TestSnapshot:
    """Test cases for the Snapshot data class."""

    def test_totals(self):
        """Test derived totals."""
        snapshot = Snapshot(
            fetched_at=STAMP,
            statistics=[
                AgencyStatistics("A", 3, "a" * 64, STAMP),
                AgencyStatistics("B", 2, "b" * 64, STAMP),
            ]
        )

        assert snapshot.total_documents == 5
        assert snapshot.agency_count == 2

    def test_dict_round_trip(self):
        """Test conversion to and from a dictionary."""
        snapshot = Snapshot(
            fetched_at=STAMP,
            documents=[Document(document_number="1")],
            statistics=[AgencyStatistics("Unknown Agency", 1, "c" * 64, STAMP)]
        )
        assert Snapshot.from_dict(snapshot.to_dict()) == snapshot

    def test_default_fetched_at_is_utc(self):
        """Test that new snapshots are stamped in UTC."""
        assert Snapshot().fetched_at.tzinfo is not None


class TestFetchSummary:
    """Test cases for the FetchSummary data class."""

    def test_get_summary(self):
        """Test the human-readable summary."""
        summary = FetchSummary(document_count=10, total_results=1500, fetched_at=STAMP)
        text = summary.get_summary()

        assert "10 documents" in text
        assert "1,500" in text
        assert "2024-01-15 12:30:00" in text


class TestTitleMap:
    """Test cases for the title number lookup."""

    def test_known_titles(self):
        """Test mapped title numbers."""
        assert map_title_number("26") == "Internal Revenue"
        assert map_title_number("1") == "General Provisions"
        assert map_title_number("50") == "Wildlife and Fisheries"

    def test_unmapped_title(self):
        """Test that unmapped numbers get a synthesized label."""
        assert map_title_number("35") == "Title 35"
        assert map_title_number("99") == "Title 99"

    def test_missing_title(self):
        """Test that an absent title number maps to None."""
        assert map_title_number(None) is None
        assert map_title_number("") is None

    def test_table_size(self):
        """Test that titles 1 to 50 except reserved title 35 are mapped."""
        assert len(TITLE_AGENCY_MAP) == 49
        assert "35" not in TITLE_AGENCY_MAP
