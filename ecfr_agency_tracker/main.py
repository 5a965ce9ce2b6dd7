#!/usr/bin/env python3
"""
Main script for the eCFR Agency Tracker.

This script exposes the fetch, snapshot, statistics and historical operations
as subcommands, with configuration handling and logging setup.
"""

import argparse
import json
import sys
import logging
from pathlib import Path
from typing import List, Optional

from .config import Config
from .api_client import ECFRClient
from .error_handler import ConfigurationError, ECFRTrackerError, describe_error
from .historical import HistoricalSeriesManager
from .report_generator import ReportGenerator
from .service import ECFRDataService
from .storage import SnapshotStore


NO_DATA_MESSAGE = "No data available. Please fetch data first."


def setup_argument_parser() -> argparse.ArgumentParser:
    """
    Set up command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='ecfr-tracker',
        description="Track eCFR document counts and checksums by agency",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s fetch --page-size 100
  %(prog)s statistics
  %(prog)s historical
  %(prog)s report --output-dir ./reports --format csv summary
        """
    )

    # Storage and API configuration
    config_group = parser.add_argument_group('Configuration')
    config_group.add_argument(
        '--data-dir',
        default=Config.DATA_DIRECTORY,
        help=f'Directory for snapshot and historical files (default: {Config.DATA_DIRECTORY})'
    )
    config_group.add_argument(
        '--api-url',
        default=Config.ECFR_API_URL,
        help=f'eCFR search API URL (default: {Config.ECFR_API_URL})'
    )
    config_group.add_argument(
        '--timeout',
        type=int,
        default=Config.REQUEST_TIMEOUT,
        help=f'Request timeout in seconds (default: {Config.REQUEST_TIMEOUT})'
    )

    # Logging
    log_group = parser.add_argument_group('Logging')
    log_group.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )
    log_group.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Only log warnings and errors to the console'
    )
    log_group.add_argument(
        '--log-file',
        help=f'Log file path (default: {Config.LOG_FILE})'
    )

    # Validation
    test_group = parser.add_argument_group('Validation')
    test_group.add_argument(
        '--validate-config',
        action='store_true',
        help='Validate configuration and exit'
    )

    subparsers = parser.add_subparsers(dest='command', metavar='command')

    raw_parser = subparsers.add_parser('raw', help='Print the raw search API response')
    raw_parser.add_argument('--page-size', type=int, default=10,
                            help='Results to request (default: 10)')

    fetch_parser = subparsers.add_parser('fetch', help='Fetch search results and save a snapshot')
    fetch_parser.add_argument('--page-size', type=int, default=Config.DEFAULT_PAGE_SIZE,
                              help=f'Results to request (default: {Config.DEFAULT_PAGE_SIZE})')

    subparsers.add_parser('snapshot', help='Print the current snapshot as JSON')
    subparsers.add_parser('statistics', help='Show document counts by agency')
    subparsers.add_parser('checksums', help='Show content checksums by agency')
    subparsers.add_parser('historical', help='Show the historical document counts')

    documents_parser = subparsers.add_parser('documents', help='List documents of the current snapshot')
    documents_parser.add_argument('--limit', type=int, help='Show at most N documents')

    subparsers.add_parser('cleanup', help='Remove placeholder agencies from the historical log')

    report_parser = subparsers.add_parser('report', help='Export reports of the current data')
    report_parser.add_argument(
        '--output-dir', '-o',
        default=Config.OUTPUT_DIRECTORY,
        help=f'Output directory for reports (default: {Config.OUTPUT_DIRECTORY})'
    )
    report_parser.add_argument(
        '--format', '-f',
        nargs='+',
        choices=['csv', 'json', 'summary'],
        default=Config.DEFAULT_OUTPUT_FORMATS,
        help=f'Output formats (default: {" ".join(Config.DEFAULT_OUTPUT_FORMATS)})'
    )
    report_parser.add_argument(
        '--filename',
        help='Base filename for reports (default: auto-generated with timestamp)'
    )

    return parser


def validate_arguments(args: argparse.Namespace) -> List[str]:
    """
    Validate command-line arguments.

    Args:
        args: Parsed command-line arguments

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if args.timeout <= 0:
        errors.append("Timeout must be positive")

    if not args.api_url.startswith(('http://', 'https://')):
        errors.append("API URL must be a valid HTTP/HTTPS URL")

    page_size = getattr(args, 'page_size', None)
    if page_size is not None and page_size <= 0:
        errors.append("Page size must be positive")

    limit = getattr(args, 'limit', None)
    if limit is not None and limit <= 0:
        errors.append("Limit must be positive")

    if args.verbose and args.quiet:
        errors.append("Cannot specify both --verbose and --quiet")

    data_dir = Path(args.data_dir)
    if data_dir.exists() and not data_dir.is_dir():
        errors.append(f"Data path is not a directory: {data_dir}")

    return errors


def setup_logging(args: argparse.Namespace) -> None:
    """
    Set up logging configuration.

    Args:
        args: Parsed command-line arguments
    """
    log_level = logging.DEBUG if args.verbose else getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO)
    if args.quiet:
        log_level = logging.WARNING

    log_format = Config.LOG_FORMAT

    # Console output goes to stderr so command output stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(log_format))

    file_handler = logging.FileHandler(args.log_file or Config.LOG_FILE)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(log_format))

    logging.basicConfig(
        level=logging.DEBUG,
        handlers=[console_handler, file_handler],
        format=log_format
    )

    # Reduce noise from urllib3
    logging.getLogger('urllib3').setLevel(logging.WARNING)


def create_service(args: argparse.Namespace) -> ECFRDataService:
    """
    Create the data service from command-line arguments.

    Args:
        args: Parsed command-line arguments

    Returns:
        Configured ECFRDataService instance
    """
    client = ECFRClient(base_url=args.api_url, timeout=args.timeout)
    store = SnapshotStore(
        data_directory=args.data_dir,
        historical=HistoricalSeriesManager(Config.historical_data_path(args.data_dir))
    )
    return ECFRDataService(client=client, store=store)


def command_raw(service: ECFRDataService, args: argparse.Namespace) -> int:
    print(service.fetch_raw(args.page_size))
    return 0


def command_fetch(service: ECFRDataService, args: argparse.Namespace) -> int:
    summary = service.fetch_and_save(args.page_size)
    print(summary.get_summary())
    return 0


def command_snapshot(service: ECFRDataService, args: argparse.Namespace) -> int:
    snapshot = service.load_snapshot()
    if snapshot is None:
        print(NO_DATA_MESSAGE, file=sys.stderr)
        return 1
    print(json.dumps(snapshot.to_dict(), indent=2, ensure_ascii=False))
    return 0


def command_statistics(service: ECFRDataService, args: argparse.Namespace) -> int:
    snapshot = service.load_snapshot()
    statistics = snapshot.statistics if snapshot else []
    if snapshot:
        print(f"Last updated: {snapshot.fetched_at.strftime('%Y-%m-%d %H:%M:%S')} UTC")
    print(f"Total documents: {sum(s.document_count for s in statistics):,}")
    print(f"Agencies: {len(statistics)}")
    print("")
    for stat in statistics:
        print(f"{stat.document_count:>8,}  {stat.agency_name}")
    return 0


def command_checksums(service: ECFRDataService, args: argparse.Namespace) -> int:
    for stat in service.get_statistics():
        print(f"{stat.checksum}  {stat.agency_name}")
    return 0


def command_historical(service: ECFRDataService, args: argparse.Namespace) -> int:
    history = service.get_historical()
    if not history:
        print("No historical data available.")
        return 0
    for entry in history:
        print(f"{entry.date.strftime('%Y-%m-%d %H:%M:%S')}  {entry.document_count:>8,}  {entry.agency_name}")
    return 0


def command_documents(service: ECFRDataService, args: argparse.Namespace) -> int:
    documents = service.get_documents()
    if args.limit:
        documents = documents[:args.limit]
    for doc in documents:
        published = doc.publication_date.isoformat() if doc.publication_date else '-'
        print(f"{doc.document_number or '-'}\t{published}\t{doc.agency_name}\t{doc.title or ''}")
    return 0


def command_cleanup(service: ECFRDataService, args: argparse.Namespace) -> int:
    removed = service.cleanup_historical()
    print(f"Historical data cleaned up successfully. {removed} invalid entries removed.")
    return 0


def command_report(service: ECFRDataService, args: argparse.Namespace) -> int:
    snapshot = service.load_snapshot()
    if snapshot is None:
        print(NO_DATA_MESSAGE, file=sys.stderr)
        return 1

    generator = ReportGenerator(args.output_dir)
    reports = generator.generate_all_reports(
        snapshot, service.get_historical(), args.filename, args.format
    )

    print("Reports generated:")
    for report_name, filepath in reports.items():
        print(f"  {report_name.upper()}: {filepath}")
    return 0


COMMANDS = {
    'raw': command_raw,
    'fetch': command_fetch,
    'snapshot': command_snapshot,
    'statistics': command_statistics,
    'checksums': command_checksums,
    'historical': command_historical,
    'documents': command_documents,
    'cleanup': command_cleanup,
    'report': command_report,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the eCFR Agency Tracker.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    if args.command is None and not args.validate_config:
        parser.error("a command is required")

    validation_errors = validate_arguments(args)
    if validation_errors:
        print("Configuration errors:", file=sys.stderr)
        for error in validation_errors:
            print(f"  - {error}", file=sys.stderr)
        return 1

    setup_logging(args)
    logger = logging.getLogger(__name__)
    logger.debug(f"Arguments: {vars(args)}")

    # Validate configuration if requested
    if args.validate_config:
        try:
            Config.validate()
            print("Configuration is valid")
            return 0
        except ConfigurationError as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            return 1

    service = None
    try:
        service = create_service(args)
        return COMMANDS[args.command](service, args)

    except KeyboardInterrupt:
        logger.info("Process interrupted by user")
        print("\nProcess interrupted by user")
        return 130

    except ECFRTrackerError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {describe_error(e)}", file=sys.stderr)
        return 1

    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    finally:
        if service:
            service.close()


if __name__ == '__main__':
    sys.exit(main())
