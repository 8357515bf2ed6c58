"""Logging from config and env.

Levels (inclusive):
- ERROR: critical errors only
- WARNING: tolerated fetch errors and ERROR
- INFO: run progress (repositories opened), WARNING, and ERROR
- DEBUG: every page request and all levels above

Configure via the config file (logging.level, logging.format), env
(LOGGING_LEVEL, LOGGING_FORMAT) or ``ghprs --log-level``. Records go to
stderr; the listing itself is printed on stdout.
"""

import logging
import sys

from ghprs.config import LoggingConfig

# Supported levels only (DEBUG, INFO, WARNING, ERROR)
LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "WARNING"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(threadName)s - %(message)s"

# HTTP client loggers that only speak up when ghprs itself runs at DEBUG
NOISY_LOGGERS = ("urllib3",)


def _resolve_level(level: str) -> int:
    """Map level name to logging constant.

    Falls back to INFO if unknown.
    """
    return LEVELS.get(level.upper().strip(), logging.INFO)


class GhprsLogging:
    """Configures root logger from LoggingConfig (YAML + env LOGGING_*)."""

    def __init__(self, config: LoggingConfig) -> None:
        self._level = _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT

    @property
    def level(self) -> int:
        return self._level

    def setup(self) -> None:
        """Send records at the configured level and format to stderr."""
        logging.basicConfig(
            level=self._level,
            format=self._format,
            stream=sys.stderr,
            force=True,
        )
        library_level = logging.DEBUG if self._level <= logging.DEBUG else logging.WARNING
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(library_level)

    def get_logger(self, name: str) -> logging.Logger:
        """Return a logger with the given name (uses root config)."""
        return logging.getLogger(name)
