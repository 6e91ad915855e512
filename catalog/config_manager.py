"""Configuration management for the Vinyl Collection Browser."""

import logging
import os
from typing import Any, Dict, Optional

from catalog.exceptions import ConfigurationError

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _optional_float(value) -> Optional[float]:
    if value is None or value == '':
        return None
    return float(value)


class Config:
    """Configuration container with validation."""

    def __init__(self):
        """Initialize configuration from config.py file or environment."""
        try:
            import sys
            from pathlib import Path

            # Add parent directory to path to import config
            config_dir = Path(__file__).parent.parent
            if str(config_dir) not in sys.path:
                sys.path.insert(0, str(config_dir))

            try:
                import config as config_module
                self._load_from_module(config_module)
            except ImportError:
                self._load_from_env()
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

        # Validation is explicit (`_validate()`) so tests can build a Config and
        # adjust it before checking.

    def _load_from_module(self, config_module) -> None:
        """Load configuration from config.py module."""
        # Collection source
        self.collection_source = getattr(config_module, 'COLLECTION_SOURCE', 'collection.csv')

        # Discogs
        self.discogs_api_url = getattr(config_module, 'DISCOGS_API_URL', 'https://api.discogs.com')
        self.discogs_token = getattr(config_module, 'DISCOGS_TOKEN', None)

        # Wikipedia
        self.wikipedia_api_url = getattr(config_module, 'WIKIPEDIA_API_URL', 'https://en.wikipedia.org/w/api.php')
        self.wikipedia_thumb_size = getattr(config_module, 'WIKIPEDIA_THUMB_SIZE', 500)

        # HTTP
        self.user_agent = getattr(config_module, 'USER_AGENT', 'VinylCollectionApp/1.0')
        self.request_timeout = getattr(config_module, 'REQUEST_TIMEOUT', None)

        # Logging
        self.log_level = getattr(config_module, 'LOG_LEVEL', 'INFO')
        self.log_format = getattr(config_module, 'LOG_FORMAT', DEFAULT_LOG_FORMAT)

        # Web UI
        self.webui_secret = getattr(config_module, 'WEBUI_SECRET', 'dev-secret')

    def _load_from_env(self) -> None:
        """Load configuration from environment variables (fallback)."""
        # Collection source
        self.collection_source = os.getenv('COLLECTION_SOURCE', 'collection.csv')

        # Discogs
        self.discogs_api_url = os.getenv('DISCOGS_API_URL', 'https://api.discogs.com')
        self.discogs_token = os.getenv('DISCOGS_TOKEN') or None

        # Wikipedia
        self.wikipedia_api_url = os.getenv('WIKIPEDIA_API_URL', 'https://en.wikipedia.org/w/api.php')
        self.wikipedia_thumb_size = int(os.getenv('WIKIPEDIA_THUMB_SIZE', '500'))

        # HTTP
        self.user_agent = os.getenv('USER_AGENT', 'VinylCollectionApp/1.0')
        self.request_timeout = _optional_float(os.getenv('REQUEST_TIMEOUT'))

        # Logging
        self.log_level = os.getenv('LOG_LEVEL', 'INFO')
        self.log_format = os.getenv('LOG_FORMAT', DEFAULT_LOG_FORMAT)

        # Web UI
        self.webui_secret = os.getenv('WEBUI_SECRET', 'dev-secret')

    def _validate(self) -> None:
        """Validate configuration values."""
        if not self.collection_source:
            raise ConfigurationError(
                "COLLECTION_SOURCE is required. Set it in config.py or the COLLECTION_SOURCE environment variable."
            )

        if self.wikipedia_thumb_size <= 0:
            raise ConfigurationError("WIKIPEDIA_THUMB_SIZE must be a positive number of pixels.")

        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ConfigurationError("REQUEST_TIMEOUT must be positive, or unset to use the transport default.")

        if str(self.log_level).upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}."
            )

    def setup_logging(self) -> None:
        """Configure root logging from LOG_LEVEL and LOG_FORMAT."""
        logging.basicConfig(level=str(self.log_level).upper(), format=self.log_format)

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary (token masked)."""
        return {
            'collection_source': self.collection_source,
            'discogs_api_url': self.discogs_api_url,
            'discogs_token': '***' if self.discogs_token else None,
            'wikipedia_api_url': self.wikipedia_api_url,
            'wikipedia_thumb_size': self.wikipedia_thumb_size,
            'user_agent': self.user_agent,
            'request_timeout': self.request_timeout,
            'log_level': self.log_level,
        }

    def __repr__(self) -> str:
        """String representation (sanitized - no token)."""
        return (
            f"Config(collection_source={self.collection_source}, "
            f"discogs_api_url={self.discogs_api_url}, "
            f"request_timeout={self.request_timeout})"
        )
