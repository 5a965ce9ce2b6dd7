"""
Configuration settings for the eCFR Agency Tracker.

This module handles configuration from environment variables and provides
default values for the application.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

from .error_handler import ConfigurationError

# Load environment variables from .env file
load_dotenv()


class Config:
    """Configuration class for the eCFR Agency Tracker."""

    # eCFR search API settings
    ECFR_API_URL: str = os.getenv(
        'ECFR_API_URL',
        'https://www.ecfr.gov/api/search/v1/results'
    )

    ECFR_API_RATE_LIMIT: float = float(os.getenv('ECFR_API_RATE_LIMIT', '1.0'))

    # Request settings
    REQUEST_TIMEOUT: int = int(os.getenv('REQUEST_TIMEOUT', '30'))
    DEFAULT_PAGE_SIZE: int = int(os.getenv('ECFR_DEFAULT_PAGE_SIZE', '100'))

    # Storage settings
    DATA_DIRECTORY: str = os.getenv('ECFR_DATA_DIRECTORY', './data')
    CURRENT_DATA_FILE: str = os.getenv('ECFR_CURRENT_FILE', 'ecfr_current.json')
    HISTORICAL_DATA_FILE: str = os.getenv('ECFR_HISTORICAL_FILE', 'ecfr_historical.json')

    # Output settings
    OUTPUT_DIRECTORY: str = os.getenv('ECFR_OUTPUT_DIR', './results')
    DEFAULT_OUTPUT_FORMATS: list = ['csv', 'json', 'summary']

    # Logging settings
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    LOG_FILE: str = os.getenv('ECFR_LOG_FILE', 'ecfr_agency_tracker.log')

    @classmethod
    def current_data_path(cls, data_directory: str = None) -> Path:
        """Path of the current snapshot file."""
        return Path(data_directory or cls.DATA_DIRECTORY) / cls.CURRENT_DATA_FILE

    @classmethod
    def historical_data_path(cls, data_directory: str = None) -> Path:
        """Path of the historical log file."""
        return Path(data_directory or cls.DATA_DIRECTORY) / cls.HISTORICAL_DATA_FILE

    @classmethod
    def validate(cls) -> None:
        """Validate configuration settings."""
        if cls.ECFR_API_RATE_LIMIT <= 0:
            raise ConfigurationError("API rate limit must be positive")

        if cls.REQUEST_TIMEOUT <= 0:
            raise ConfigurationError("Request timeout must be positive")

        if cls.DEFAULT_PAGE_SIZE <= 0:
            raise ConfigurationError("Default page size must be positive")

        if not cls.ECFR_API_URL.startswith(('http://', 'https://')):
            raise ConfigurationError("API URL must be a valid HTTP/HTTPS URL")

        if not cls.DATA_DIRECTORY:
            raise ConfigurationError("Data directory must be set")
