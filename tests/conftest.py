"""
Pytest configuration and shared fixtures.
"""

import pytest
import tempfile
import shutil
from datetime import date
from pathlib import Path

from ecfr_agency_tracker.models import Document
from ecfr_agency_tracker.historical import HistoricalSeriesManager
from ecfr_agency_tracker.storage import SnapshotStore


@pytest.fixture
def temp_data_dir():
    """Temporary data directory removed after the test."""
    temp_dir = tempfile.mkdtemp(prefix="ecfr_tracker_test_")
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def snapshot_store(temp_data_dir):
    """Snapshot store writing into a temporary directory."""
    return SnapshotStore(str(temp_data_dir))


@pytest.fixture
def historical_manager(temp_data_dir):
    """Historical log manager writing into a temporary directory."""
    return HistoricalSeriesManager(temp_data_dir / "ecfr_historical.json")


@pytest.fixture
def sample_documents():
    """Documents from three agencies, in fetch order."""
    return [
        Document(
            document_number="2024-00001",
            title="Definitions",
            agency_name="Internal Revenue Service",
            type="Rule",
            publication_date=date(2024, 1, 15),
            citation="Title 26 Part 1 § 1.1",
            url="https://www.ecfr.gov/current/title-26/section-1.1"
        ),
        Document(
            document_number="2024-00002",
            title="Reserve requirements",
            agency_name="Federal Reserve System",
            type="Rule",
            publication_date=date(2024, 1, 16)
        ),
        Document(
            document_number="2024-00003",
            title="Filing requirements",
            agency_name="Internal Revenue Service",
            type="Proposed Rule",
            publication_date=date(2024, 1, 17)
        ),
        Document(
            document_number="2024-00004",
            title="Scope",
            agency_name="Federal Aviation Administration",
            type="Notice"
        ),
    ]


@pytest.fixture
def sample_search_payload():
    """Raw search API payload with heterogeneous item shapes."""
    return {
        "total_count": 1234,
        "results": [
            {
                "starts_on": "2024-01-15",
                "type": "Section",
                "headings": {
                    "title": "Internal Revenue",
                    "chapter": "Internal Revenue Service, Department of the Treasury",
                    "part": "Income Taxes",
                    "section": "Tax imposed"
                },
                "hierarchy": {"title": "26", "chapter": "I", "part": "1", "section": "1.1"},
                "hierarchy_headings": {
                    "title": "Title 26",
                    "part": "Part 1",
                    "section": "§ 1.1"
                }
            },
            {
                "document_number": "2024-11111",
                "title": "Air carrier certification",
                "agency": "12",
                "hierarchy": {"title": 14},
                "publication_date": "2024-02-01",
                "html_url": "https://www.ecfr.gov/current/title-14"
            },
            {
                "object_id": 987,
                "agency_names": "Environmental Protection Agency, Office of Air",
                "document_type": "Rule",
                "citation": "40 CFR 60.1",
                "date": "not a date"
            }
        ]
    }


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
    config.addinivalue_line(
        "markers", "requires_api: mark test as requiring external API"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test names."""
    for item in items:
        if "integration" in item.nodeid.lower():
            item.add_marker(pytest.mark.integration)
