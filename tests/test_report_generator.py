"""Tests for the report generator module."""

import csv
import json
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from ecfr_agency_tracker.models import Document, HistoricalChange, Snapshot
from ecfr_agency_tracker.report_generator import ReportGenerator
from ecfr_agency_tracker.statistics_engine import calculate_statistics


STAMP = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


class TestReportGenerator:
    """Test cases for the ReportGenerator class."""

    def create_test_snapshot(self, documents) -> Snapshot:
        """Create a snapshot with computed statistics."""
        return Snapshot(
            fetched_at=STAMP,
            documents=documents,
            statistics=calculate_statistics(documents, STAMP)
        )

    def create_test_history(self):
        return [
            HistoricalChange("Internal Revenue Service", STAMP, 2),
            HistoricalChange("Federal Reserve System", STAMP, 1),
        ]

    def test_initialization_creates_directory(self):
        """Test that initialization creates output directory if it doesn't exist."""
        with tempfile.TemporaryDirectory() as temp_dir:
            output_dir = Path(temp_dir) / "new_reports"
            generator = ReportGenerator(str(output_dir))

            assert generator.output_directory.exists()

    def test_generate_statistics_csv(self, sample_documents):
        """Test statistics CSV generation."""
        with tempfile.TemporaryDirectory() as temp_dir:
            generator = ReportGenerator(temp_dir)
            snapshot = self.create_test_snapshot(sample_documents)

            filepath = generator.generate_statistics_csv(snapshot, "stats.csv")

            with open(filepath, 'r', encoding='utf-8') as csvfile:
                rows = list(csv.DictReader(csvfile))

            assert [r['agency_name'] for r in rows] == [
                "Internal Revenue Service",
                "Federal Reserve System",
                "Federal Aviation Administration"
            ]
            assert rows[0]['document_count'] == '2'
            assert rows[0]['checksum'] == snapshot.statistics[0].checksum

    def test_generate_documents_csv(self):
        """Test that document values are flattened to one line."""
        with tempfile.TemporaryDirectory() as temp_dir:
            generator = ReportGenerator(temp_dir)
            snapshot = self.create_test_snapshot([
                Document(document_number="A1", title="Line one\nline   two", agency_name="X")
            ])

            filepath = generator.generate_documents_csv(snapshot, "docs.csv")

            with open(filepath, 'r', encoding='utf-8') as csvfile:
                rows = list(csv.DictReader(csvfile))

            assert rows[0]['title'] == "Line one line two"
            assert rows[0]['publication_date'] == ""

    def test_generate_historical_csv(self):
        """Test historical CSV generation."""
        with tempfile.TemporaryDirectory() as temp_dir:
            generator = ReportGenerator(temp_dir)

            filepath = generator.generate_historical_csv(self.create_test_history(), "hist.csv")

            with open(filepath, 'r', encoding='utf-8') as csvfile:
                rows = list(csv.DictReader(csvfile))

            assert len(rows) == 2
            assert rows[0]['date'] == STAMP.isoformat()

    def test_generate_json_report(self, sample_documents):
        """Test JSON report generation with metadata."""
        with tempfile.TemporaryDirectory() as temp_dir:
            generator = ReportGenerator(temp_dir)
            snapshot = self.create_test_snapshot(sample_documents)

            filepath = generator.generate_json_report(
                snapshot, self.create_test_history(), "report.json")

            with open(filepath, 'r', encoding='utf-8') as jsonfile:
                data = json.load(jsonfile)

            assert data['metadata']['total_documents'] == 4
            assert data['metadata']['agency_count'] == 3
            assert len(data['documents']) == 4
            assert len(data['historical']) == 2

    def test_generate_json_report_without_metadata(self, sample_documents):
        """Test JSON report generation without the metadata block."""
        with tempfile.TemporaryDirectory() as temp_dir:
            generator = ReportGenerator(temp_dir)
            snapshot = self.create_test_snapshot(sample_documents)

            filepath = generator.generate_json_report(snapshot, filename="plain.json",
                                                      include_metadata=False)

            with open(filepath, 'r', encoding='utf-8') as jsonfile:
                data = json.load(jsonfile)

            assert 'metadata' not in data
            assert 'historical' not in data
            assert len(data['documents']) == 4
            assert data['fetched_at'] == STAMP.isoformat()

    def test_generate_summary_report(self, sample_documents):
        """Test summary report content."""
        with tempfile.TemporaryDirectory() as temp_dir:
            generator = ReportGenerator(temp_dir)
            snapshot = self.create_test_snapshot(sample_documents)

            filepath = generator.generate_summary_report(snapshot, [], "summary.txt")
            content = Path(filepath).read_text(encoding='utf-8')

            assert "eCFR AGENCY TRACKER - SUMMARY REPORT" in content
            assert "Total documents: 4" in content
            assert " 1. Internal Revenue Service: 2 documents" in content
            assert snapshot.statistics[0].checksum in content

    def test_generate_all_reports(self, sample_documents):
        """Test generating a subset of formats."""
        with tempfile.TemporaryDirectory() as temp_dir:
            generator = ReportGenerator(temp_dir)
            snapshot = self.create_test_snapshot(sample_documents)

            reports = generator.generate_all_reports(
                snapshot, self.create_test_history(), "base", ['json', 'summary'])

            assert set(reports) == {'json', 'summary'}
            for filepath in reports.values():
                assert Path(filepath).exists()

            reports = generator.generate_all_reports(snapshot, base_filename="all")
            assert set(reports) == {'statistics_csv', 'documents_csv', 'historical_csv',
                                    'json', 'summary'}

    def test_escape_csv_value(self):
        """Test CSV value normalization."""
        generator = ReportGenerator(tempfile.mkdtemp())

        assert generator._escape_csv_value(None) == ""
        assert generator._escape_csv_value("a\x00b\r\nc") == "ab c"
