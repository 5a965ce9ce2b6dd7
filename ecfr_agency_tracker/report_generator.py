"""
Report Generator for exporting snapshot statistics and the historical log.

This module renders the dashboard, checksum, historical and document views as
CSV, JSON and plain-text summary files.
"""

import csv
import json
import logging
from pathlib import Path
from typing import List, Dict, Any, Optional
from datetime import datetime

from .models import HistoricalChange, Snapshot, utc_now


logger = logging.getLogger(__name__)


class ReportGenerator:
    """Generates reports from a snapshot and the historical log."""

    def __init__(self, output_directory: str = "./results"):
        """
        Initialize the report generator.

        Args:
            output_directory: Directory to save generated reports
        """
        self.output_directory = Path(output_directory)
        self.output_directory.mkdir(parents=True, exist_ok=True)
        logger.info(f"Report generator initialized with output directory: {self.output_directory}")

    def _default_filename(self, prefix: str, extension: str) -> str:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"{prefix}_{timestamp}.{extension}"

    def _write_csv(self, filename: str, fieldnames: List[str],
                   rows: List[Dict[str, Any]]) -> str:
        filepath = self.output_directory / filename
        logger.info(f"Generating CSV report: {filepath}")

        try:
            with open(filepath, 'w', newline='', encoding='utf-8') as csvfile:
                writer = csv.DictWriter(csvfile, fieldnames=fieldnames, quoting=csv.QUOTE_MINIMAL)
                writer.writeheader()
                writer.writerows(rows)

            logger.info(f"CSV report generated successfully: {filepath}")
            return str(filepath)

        except IOError as e:
            logger.error(f"Failed to write CSV report: {e}")
            raise IOError(f"Failed to write CSV report to {filepath}: {e}")

    def generate_statistics_csv(self, snapshot: Snapshot, filename: Optional[str] = None) -> str:
        """
        Generate a CSV of agency statistics with checksums.

        Args:
            snapshot: Snapshot whose statistics are exported
            filename: Optional custom filename (default: auto-generated)

        Returns:
            Path to the generated CSV file
        """
        rows = [
            {
                'agency_name': self._escape_csv_value(stat.agency_name),
                'document_count': stat.document_count,
                'checksum': stat.checksum,
                'last_updated': stat.last_updated.isoformat()
            }
            for stat in snapshot.statistics
        ]
        return self._write_csv(
            filename or self._default_filename("ecfr_agency_statistics", "csv"),
            ['agency_name', 'document_count', 'checksum', 'last_updated'],
            rows
        )

    def generate_historical_csv(self, history: List[HistoricalChange],
                                filename: Optional[str] = None) -> str:
        """Generate a CSV of the historical log."""
        rows = [
            {
                'date': entry.date.isoformat(),
                'agency_name': self._escape_csv_value(entry.agency_name),
                'document_count': entry.document_count
            }
            for entry in history
        ]
        return self._write_csv(
            filename or self._default_filename("ecfr_historical_counts", "csv"),
            ['date', 'agency_name', 'document_count'],
            rows
        )

    def generate_documents_csv(self, snapshot: Snapshot, filename: Optional[str] = None) -> str:
        """Generate a CSV of the snapshot's documents."""
        fieldnames = ['document_number', 'title', 'agency_name', 'type',
                      'publication_date', 'citation', 'url']
        rows = []
        for doc in snapshot.documents:
            record = doc.to_dict()
            rows.append({
                name: self._escape_csv_value(record[name]) for name in fieldnames
            })
        return self._write_csv(
            filename or self._default_filename("ecfr_documents", "csv"),
            fieldnames,
            rows
        )

    def generate_json_report(self, snapshot: Snapshot,
                             history: Optional[List[HistoricalChange]] = None,
                             filename: Optional[str] = None,
                             include_metadata: bool = True) -> str:
        """
        Generate a JSON report of the snapshot.

        Args:
            snapshot: Snapshot to export
            history: Optional historical log to include
            filename: Optional custom filename (default: auto-generated)
            include_metadata: Whether to include metadata and summary statistics

        Returns:
            Path to the generated JSON file
        """
        filepath = self.output_directory / (
            filename or self._default_filename("ecfr_snapshot", "json")
        )
        logger.info(f"Generating JSON report: {filepath}")

        report_data: Dict[str, Any] = {}
        if include_metadata:
            report_data['metadata'] = {
                'generated_at': utc_now().isoformat(),
                'fetched_at': snapshot.fetched_at.isoformat(),
                'total_documents': snapshot.total_documents,
                'agency_count': snapshot.agency_count
            }
        report_data.update(snapshot.to_dict())
        if history is not None:
            report_data['historical'] = [entry.to_dict() for entry in history]

        try:
            with open(filepath, 'w', encoding='utf-8') as jsonfile:
                json.dump(report_data, jsonfile, indent=2, ensure_ascii=False, default=str)

            logger.info(f"JSON report generated successfully: {filepath}")
            return str(filepath)

        except IOError as e:
            logger.error(f"Failed to write JSON report: {e}")
            raise IOError(f"Failed to write JSON report to {filepath}: {e}")

    def generate_summary_report(self, snapshot: Snapshot,
                                history: Optional[List[HistoricalChange]] = None,
                                filename: Optional[str] = None) -> str:
        """
        Generate a human-readable summary report.

        Returns:
            Path to the generated summary file
        """
        filepath = self.output_directory / (
            filename or self._default_filename("ecfr_summary", "txt")
        )
        logger.info(f"Generating summary report: {filepath}")

        try:
            with open(filepath, 'w', encoding='utf-8') as summaryfile:
                summaryfile.write(self.build_summary_content(snapshot, history or []))

            logger.info(f"Summary report generated successfully: {filepath}")
            return str(filepath)

        except IOError as e:
            logger.error(f"Failed to write summary report: {e}")
            raise IOError(f"Failed to write summary report to {filepath}: {e}")

    def generate_all_reports(self, snapshot: Snapshot,
                             history: Optional[List[HistoricalChange]] = None,
                             base_filename: Optional[str] = None,
                             formats: Optional[List[str]] = None) -> Dict[str, str]:
        """
        Generate the requested report formats.

        Args:
            snapshot: Snapshot to export
            history: Historical log to export
            base_filename: Optional base filename (timestamp will be added)
            formats: Subset of get_supported_formats() (default: all)

        Returns:
            Dictionary mapping report type to file path
        """
        formats = formats or self.get_supported_formats()
        history = history or []

        if base_filename is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            base_filename = f"ecfr_report_{timestamp}"

        reports = {}
        if 'csv' in formats:
            reports['statistics_csv'] = self.generate_statistics_csv(
                snapshot, f"{base_filename}_statistics.csv")
            reports['documents_csv'] = self.generate_documents_csv(
                snapshot, f"{base_filename}_documents.csv")
            reports['historical_csv'] = self.generate_historical_csv(
                history, f"{base_filename}_historical.csv")
        if 'json' in formats:
            reports['json'] = self.generate_json_report(
                snapshot, history, f"{base_filename}.json")
        if 'summary' in formats:
            reports['summary'] = self.generate_summary_report(
                snapshot, history, f"{base_filename}_summary.txt")

        logger.info(f"Generated {len(reports)} report files")
        return reports

    def _escape_csv_value(self, value: Optional[str]) -> str:
        """
        Normalize a value for CSV output.

        Args:
            value: String value to escape

        Returns:
            Single-line string with collapsed whitespace
        """
        if not value:
            return ""

        cleaned = str(value).replace('\x00', '').strip()
        cleaned = cleaned.replace('\n', ' ').replace('\r', ' ')
        return ' '.join(cleaned.split())

    def build_summary_content(self, snapshot: Snapshot,
                              history: List[HistoricalChange]) -> str:
        """
        Build the content for the summary report.

        Args:
            snapshot: Snapshot to summarize
            history: Historical log

        Returns:
            Formatted summary content
        """
        lines = []
        lines.append("=" * 80)
        lines.append("eCFR AGENCY TRACKER - SUMMARY REPORT")
        lines.append("=" * 80)
        lines.append(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append(f"Data last updated: {snapshot.fetched_at.strftime('%Y-%m-%d %H:%M:%S')} UTC")
        lines.append("")

        lines.append("OVERALL STATISTICS")
        lines.append("-" * 40)
        lines.append(f"Total documents: {snapshot.total_documents:,}")
        lines.append(f"Agencies: {snapshot.agency_count}")
        lines.append(f"Historical entries: {len(history)}")
        lines.append("")

        if snapshot.statistics:
            lines.append("TOP 10 AGENCIES BY DOCUMENT COUNT")
            lines.append("-" * 40)
            for i, stat in enumerate(snapshot.statistics[:10], 1):
                lines.append(f"{i:2d}. {stat.agency_name}: {stat.document_count:,} documents")
            lines.append("")

            lines.append("CHECKSUMS")
            lines.append("-" * 40)
            for stat in snapshot.statistics:
                lines.append(f"{stat.checksum}  {stat.agency_name}")
            lines.append("")

        lines.append("=" * 80)
        lines.append("End of Report")
        lines.append("=" * 80)

        return "\n".join(lines)

    def get_supported_formats(self) -> List[str]:
        """
        Get list of supported output formats.

        Returns:
            List of supported format names
        """
        return ['csv', 'json', 'summary']
